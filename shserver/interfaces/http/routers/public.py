"""Public endpoints consumed by ``curl | sh`` clients and browsers."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from shserver import __version__
from shserver.core.config import Settings, get_settings
from shserver.interfaces.http.deps import get_catalog_service, get_dispatcher, get_provenance
from shserver.modules.access import (
    ClientKind,
    InvalidPasswordError,
    PasswordNotConfiguredError,
    ScriptNotLockedError,
    classify_request,
)
from shserver.modules.access.dispatcher import GatedContent, LockPrompt, NotFound, PublicContent, ScriptDispatcher
from shserver.modules.audit.models import Provenance
from shserver.modules.catalog.service import CatalogService
from shserver.modules.scripts import InvalidPathError, Script, ScriptNotFoundError
from shserver.modules.scripts.paths import SCRIPT_SUFFIX
from shserver.schemas import UnlockRequest, UnlockResponse
from shserver.web import templates

logger = logging.getLogger(__name__)

router = APIRouter()

PREVIEW_LINES = 20


def _template_context(settings: Settings, **extra) -> dict:
    return {
        "hostname": settings.site.hostname,
        "base_url": settings.base_url,
        "version": __version__,
        **extra,
    }


def _landing_page(request: Request, settings: Settings) -> Response:
    return templates.TemplateResponse(request, "index.html", _template_context(settings))


def _shell(request: Request, name: str, settings: Settings, cache_control: str, **extra) -> Response:
    return templates.TemplateResponse(
        request,
        name,
        _template_context(settings, **extra),
        media_type="text/plain",
        headers={"Cache-Control": cache_control},
    )


def _script_body(script: Script, cache_control: str) -> PlainTextResponse:
    return PlainTextResponse(script.content, headers={"Cache-Control": cache_control})


def render_preview(script: Script) -> str:
    """Short description used by the interactive browser's preview pane."""
    lines = [f"# {script.name}"]
    if script.description:
        lines.append(f"# {script.description}")
    if script.tags:
        lines.append(f"# Tags: {script.tags}")
    if script.locked:
        lines.append("# Locked: a password is required to run this script")
        return "\n".join(lines) + "\n"

    body = script.content.split("\n")
    lines.append("")
    lines.append("# Content:")
    lines.extend(body[:PREVIEW_LINES])
    if len(body) > PREVIEW_LINES:
        lines.append("")
        lines.append(f"... ({len(body) - PREVIEW_LINES} more lines)")
    return "\n".join(lines) + "\n"


@router.get("/", include_in_schema=False)
async def root(request: Request, settings: Settings = Depends(get_settings)):
    if classify_request(request) is ClientKind.CLI:
        return PlainTextResponse(
            f"curl -fsSL {settings.base_url}/help.sh | sh\n"
            f"curl -fsSL {settings.base_url}/search.sh | sh\n"
        )
    return _landing_page(request, settings)


@router.get("/help.sh", include_in_schema=False)
async def help_script(request: Request, settings: Settings = Depends(get_settings)):
    return _shell(request, "help.sh", settings, "max-age=300")


@router.get("/search.sh", include_in_schema=False)
async def search_script(request: Request, settings: Settings = Depends(get_settings)):
    return _shell(request, "search.sh", settings, "no-cache")


@router.get("/_catalog.json", summary="Public script catalog")
async def catalog(service: CatalogService = Depends(get_catalog_service)):
    entries = await service.catalog()
    return JSONResponse([entry.to_dict() for entry in entries], headers={"Cache-Control": "max-age=60"})


@router.post("/_auth/unlock", response_model=UnlockResponse, summary="Exchange a password for a script token")
async def unlock(
    payload: UnlockRequest,
    dispatcher: ScriptDispatcher = Depends(get_dispatcher),
    provenance: Provenance = Depends(get_provenance),
) -> UnlockResponse:
    try:
        issued = await dispatcher.verify_unlock(payload.path, payload.password, provenance)
    except InvalidPathError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except ScriptNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Script not found") from exc
    except ScriptNotLockedError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Script is not locked") from exc
    except PasswordNotConfiguredError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Script has no password set"
        ) from exc
    except InvalidPasswordError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid password") from exc

    return UnlockResponse(token=issued.token, expires_at=issued.expires_at.isoformat(timespec="seconds"))


@router.get("/{path:path}", include_in_schema=False)
async def serve(
    path: str,
    request: Request,
    token: Optional[str] = None,
    preview: Optional[str] = None,
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
    dispatcher: ScriptDispatcher = Depends(get_dispatcher),
):
    if not path.endswith(SCRIPT_SUFFIX):
        if classify_request(request) is ClientKind.BROWSER:
            return _landing_page(request, settings)
        return PlainTextResponse("Not found\n", status_code=status.HTTP_404_NOT_FOUND)

    try:
        if preview == "1":
            script = await dispatcher.resolve(path)
            if script is None:
                return PlainTextResponse("Script not found\n", status_code=status.HTTP_404_NOT_FOUND)
            return PlainTextResponse(render_preview(script), headers={"Cache-Control": "no-store"})

        result = await dispatcher.resolve_and_serve(path, token, authorization)
    except InvalidPathError as exc:
        return PlainTextResponse(f"{exc}\n", status_code=status.HTTP_400_BAD_REQUEST)

    if isinstance(result, NotFound):
        return PlainTextResponse("Script not found\n", status_code=status.HTTP_404_NOT_FOUND)
    if isinstance(result, PublicContent):
        return _script_body(result.script, "max-age=60")
    if isinstance(result, GatedContent):
        return _script_body(result.script, "no-store")
    if isinstance(result, LockPrompt):
        return _shell(request, "unlock_prompt.sh", settings, "no-store", script_path=result.script.path)
    raise AssertionError(f"unhandled serve result: {result!r}")
