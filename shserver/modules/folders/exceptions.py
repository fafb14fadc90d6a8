"""Folder domain specific exceptions."""


class FolderError(Exception):
    """Base class for folder domain errors."""


class FolderAlreadyExistsError(FolderError):
    """Raised by storage when a folder record already exists at the path."""


class FolderNotFoundError(FolderError):
    """Raised when the requested folder cannot be found."""
