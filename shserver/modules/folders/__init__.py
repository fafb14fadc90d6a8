"""Folder domain: organisational folders derived from script paths."""

from .exceptions import FolderAlreadyExistsError, FolderError, FolderNotFoundError
from .models import Folder

__all__ = ["Folder", "FolderAlreadyExistsError", "FolderError", "FolderNotFoundError"]
