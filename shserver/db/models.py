"""SQLAlchemy ORM models."""
import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func

from shserver.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


class Script(Base):
    __tablename__ = "scripts"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    path = Column(String(512), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False, index=True)
    content = Column(Text, nullable=False, default="")
    description = Column(Text, default="")
    tags = Column(Text, default="")
    locked = Column(Boolean, nullable=False, default=False)
    password_hash = Column(String(255))
    danger_level = Column(Integer, nullable=False, default=0)
    requires = Column(Text, default="")
    examples = Column(Text, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class Folder(Base):
    __tablename__ = "folders"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    path = Column(String(512), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class AuthToken(Base):
    __tablename__ = "auth_tokens"

    token = Column(String(128), primary_key=True)
    script_id = Column(String(36), ForeignKey("scripts.id", ondelete="CASCADE"), nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    ip_address = Column(String(64))
    user_agent = Column(String(512))


class AuditLog(Base):
    __tablename__ = "audit_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    action = Column(String(32), nullable=False)
    entity_type = Column(String(32), nullable=False)
    entity_id = Column(String(36))
    entity_path = Column(String(512))
    details = Column(Text)
    ip_address = Column(String(64))
    user_agent = Column(String(512))
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)


class ScriptVersion(Base):
    __tablename__ = "script_versions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    script_id = Column(String(36), ForeignKey("scripts.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
