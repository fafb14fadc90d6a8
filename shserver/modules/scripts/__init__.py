"""Script domain: paths, models and errors."""

from .exceptions import InvalidPathError, ScriptAlreadyExistsError, ScriptError, ScriptNotFoundError
from .models import DangerLevel, Script, ScriptCreateInput, ScriptUpdateInput, ScriptVersion
from .paths import validate_folder_path, validate_script_path

__all__ = [
    "DangerLevel",
    "InvalidPathError",
    "Script",
    "ScriptAlreadyExistsError",
    "ScriptCreateInput",
    "ScriptError",
    "ScriptNotFoundError",
    "ScriptUpdateInput",
    "ScriptVersion",
    "validate_folder_path",
    "validate_script_path",
]
