"""Initial schema - resource, access group, membership, access code, generation, audit.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "access_group",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("owner_id", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_access_group_slug", "access_group", ["slug"], unique=True)

    op.create_table(
        "resource",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("kind", sa.String(20), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("owner_id", sa.String(255), nullable=False),
        sa.Column(
            "group_id",
            sa.UUID(),
            sa.ForeignKey("access_group.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("kind IN ('video', 'image')", name="ck_resource_kind"),
    )
    op.create_index("ix_resource_kind_slug", "resource", ["kind", "slug"], unique=True)
    op.create_index("ix_resource_group_id", "resource", ["group_id"])

    op.create_table(
        "group_membership",
        sa.Column(
            "group_id",
            sa.UUID(),
            sa.ForeignKey("access_group.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("user_id", sa.String(255), primary_key=True),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "role IN ('viewer', 'contributor', 'editor', 'admin')",
            name="ck_group_membership_role",
        ),
    )
    op.create_index("ix_group_membership_user_id", "group_membership", ["user_id"])

    op.create_table(
        "access_code",
        sa.Column("code", sa.String(255), primary_key=True),
        sa.Column(
            "resource_id",
            sa.UUID(),
            sa.ForeignKey("resource.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column(
            "group_id",
            sa.UUID(),
            sa.ForeignKey("access_group.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("created_by", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("description", sa.Text(), nullable=True),
        sa.CheckConstraint(
            "(resource_id IS NULL) <> (group_id IS NULL)",
            name="ck_access_code_single_scope",
        ),
        sa.CheckConstraint(
            "expires_at IS NULL OR expires_at > created_at",
            name="ck_access_code_expiry",
        ),
    )
    op.create_index("ix_access_code_created_by", "access_code", ["created_by"])

    op.create_table(
        "resource_generation",
        sa.Column(
            "resource_id",
            sa.UUID(),
            sa.ForeignKey("resource.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("generation", sa.BigInteger(), nullable=False, server_default="0"),
    )

    # No FK on resource_id: denials for unknown resources are audited too.
    op.create_table(
        "access_audit_log",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("resource_id", sa.UUID(), nullable=False),
        sa.Column("subject_fingerprint", sa.String(255), nullable=False),
        sa.Column("capability_requested", sa.String(20), nullable=False),
        sa.Column("access_granted", sa.Boolean(), nullable=False),
        sa.Column("outcome", sa.String(50), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=True),
        sa.Column("access_code", sa.String(255), nullable=True),
        sa.Column("capability_granted", sa.String(20), nullable=True),
        sa.Column("source", sa.String(50), nullable=True),
        sa.Column("ip_address", sa.String(64), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
    )
    op.create_index(
        "ix_access_audit_log_resource_created",
        "access_audit_log",
        ["resource_id", "created_at"],
    )
    op.create_index(
        "ix_access_audit_log_denied",
        "access_audit_log",
        ["created_at"],
        postgresql_where=sa.text("access_granted = false"),
    )


def downgrade() -> None:
    op.drop_table("access_audit_log")
    op.drop_table("resource_generation")
    op.drop_table("access_code")
    op.drop_table("group_membership")
    op.drop_table("resource")
    op.drop_table("access_group")
