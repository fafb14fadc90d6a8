"""Access gating exceptions."""


class AccessError(Exception):
    """Base class for access gating errors."""


class ScriptNotLockedError(AccessError):
    """Raised when unlocking a script that is not locked."""


class PasswordNotConfiguredError(AccessError):
    """Raised when a locked script has no password hash (server misconfiguration)."""


class InvalidPasswordError(AccessError):
    """Raised when the supplied password does not match."""
