"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .services import (
    get_audit_service,
    get_catalog_service,
    get_dispatcher,
    get_folder_service,
    get_provenance,
    get_script_service,
)

__all__ = [
    "get_db_session",
    "get_audit_service",
    "get_catalog_service",
    "get_dispatcher",
    "get_folder_service",
    "get_provenance",
    "get_script_service",
]
