"""Access gating for locked scripts and client negotiation."""

from .exceptions import AccessError, InvalidPasswordError, PasswordNotConfiguredError, ScriptNotLockedError
from .models import AccessGranted, AuthToken, IssuedToken, NeedsPassword
from .negotiation import ClientKind, classify, classify_request

__all__ = [
    "AccessError",
    "AccessGranted",
    "AuthToken",
    "ClientKind",
    "InvalidPasswordError",
    "IssuedToken",
    "NeedsPassword",
    "PasswordNotConfiguredError",
    "ScriptNotLockedError",
    "classify",
    "classify_request",
]
