"""Decide whether a request comes from a command-line client or a browser."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from starlette.requests import Request


class ClientKind(str, Enum):
    CLI = "cli"
    BROWSER = "browser"


CLI_USER_AGENT_MARKERS = (
    "curl",
    "wget",
    "httpie",
    "fetch",
    "libfetch",
    "aria2",
    "python-requests",
    "python-httpx",
    "python-urllib",
    "go-http-client",
)


def classify(user_agent: Optional[str], accept: Optional[str]) -> ClientKind:
    """Classify a request from its ``User-Agent`` and ``Accept`` headers.

    Order matters: a known CLI signature wins over ``Accept``, and an explicit
    ``text/html`` wins over the empty User-Agent fallback.
    """
    ua = (user_agent or "").lower()
    accept = accept or ""

    if any(marker in ua for marker in CLI_USER_AGENT_MARKERS):
        return ClientKind.CLI
    if "text/html" in accept:
        return ClientKind.BROWSER
    if not ua:
        return ClientKind.CLI
    return ClientKind.BROWSER


def classify_request(request: Request) -> ClientKind:
    return classify(request.headers.get("user-agent"), request.headers.get("accept"))


__all__ = ["CLI_USER_AGENT_MARKERS", "ClientKind", "classify", "classify_request"]
