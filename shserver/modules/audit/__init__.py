"""Append-only audit trail."""

from .models import AuditAction, AuditEntry, EntityType, Provenance

__all__ = ["AuditAction", "AuditEntry", "EntityType", "Provenance"]
