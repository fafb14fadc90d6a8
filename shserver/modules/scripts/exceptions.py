"""Script domain specific exceptions."""


class ScriptError(Exception):
    """Base class for script domain errors."""


class InvalidPathError(ScriptError, ValueError):
    """Raised when a script or folder path does not satisfy the path grammar."""


class ScriptAlreadyExistsError(ScriptError):
    """Raised when a script with the same path already exists."""


class ScriptNotFoundError(ScriptError):
    """Raised when the requested script cannot be found."""
