"""base schema: scripts, folders, auth tokens, audit log, versions

Revision ID: 5d1f0c2a9b34
Revises: 
Create Date: 2026-10-18 09:30:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "5d1f0c2a9b34"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "scripts",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("path", sa.String(length=512), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False, server_default=""),
        sa.Column("description", sa.Text(), server_default=""),
        sa.Column("tags", sa.Text(), server_default=""),
        sa.Column("locked", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("password_hash", sa.String(length=255)),
        sa.Column("danger_level", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("requires", sa.Text(), server_default=""),
        sa.Column("examples", sa.Text(), server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_scripts_path", "scripts", ["path"], unique=True)
    op.create_index("ix_scripts_name", "scripts", ["name"])

    op.create_table(
        "folders",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("path", sa.String(length=512), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_folders_path", "folders", ["path"], unique=True)

    op.create_table(
        "auth_tokens",
        sa.Column("token", sa.String(length=128), primary_key=True),
        sa.Column(
            "script_id",
            sa.String(length=36),
            sa.ForeignKey("scripts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("ip_address", sa.String(length=64)),
        sa.Column("user_agent", sa.String(length=512)),
    )
    op.create_index("ix_auth_tokens_script_id", "auth_tokens", ["script_id"])
    op.create_index("ix_auth_tokens_expires_at", "auth_tokens", ["expires_at"])

    op.create_table(
        "audit_log",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("action", sa.String(length=32), nullable=False),
        sa.Column("entity_type", sa.String(length=32), nullable=False),
        sa.Column("entity_id", sa.String(length=36)),
        sa.Column("entity_path", sa.String(length=512)),
        sa.Column("details", sa.Text()),
        sa.Column("ip_address", sa.String(length=64)),
        sa.Column("user_agent", sa.String(length=512)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_audit_log_created_at", "audit_log", ["created_at"])

    op.create_table(
        "script_versions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "script_id",
            sa.String(length=36),
            sa.ForeignKey("scripts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_script_versions_script_id", "script_versions", ["script_id"])


def downgrade() -> None:
    op.drop_index("ix_script_versions_script_id", table_name="script_versions")
    op.drop_table("script_versions")
    op.drop_index("ix_audit_log_created_at", table_name="audit_log")
    op.drop_table("audit_log")
    op.drop_index("ix_auth_tokens_expires_at", table_name="auth_tokens")
    op.drop_index("ix_auth_tokens_script_id", table_name="auth_tokens")
    op.drop_table("auth_tokens")
    op.drop_index("ix_folders_path", table_name="folders")
    op.drop_table("folders")
    op.drop_index("ix_scripts_name", table_name="scripts")
    op.drop_index("ix_scripts_path", table_name="scripts")
    op.drop_table("scripts")
