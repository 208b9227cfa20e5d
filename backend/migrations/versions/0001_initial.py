"""Initial schema – Users and Sessions

Revision ID: 0001_initial
Revises:
Create Date: 2026-02-05

Creates both relations under their default names.  Deployments that
configure custom table names let UserUtil.init() create them instead.
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.mysql import VARBINARY

# Alembic revision identifiers
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # -- Users ----------------------------------------------------------
    op.create_table(
        "Users",
        sa.Column("ID", sa.String(36), primary_key=True),
        sa.Column("username", sa.String(255), nullable=False),
        # caller-supplied credential hash, stored verbatim
        sa.Column("passwd", sa.LargeBinary(), nullable=False),
        sa.Column("created_at", sa.Integer(), nullable=False),
        sa.Column("last_edited_at", sa.Integer(), nullable=False),
        sa.Column("disabled", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_Users_username", "Users", ["username"], unique=True)

    # -- Sessions -------------------------------------------------------
    op.create_table(
        "Sessions",
        sa.Column("ID", sa.String(36), primary_key=True),
        # owning user – no FK, sessions outlive a deleted user until reaped
        sa.Column("UserID", sa.String(36), nullable=False),
        sa.Column(
            "Token",
            sa.LargeBinary(32).with_variant(VARBINARY(32), "mysql"),
            nullable=False,
        ),
        sa.Column("Expire_at", sa.Integer(), nullable=False),
    )

    # token lookups: check / renew / terminate / info
    op.create_index("ix_Sessions_Token", "Sessions", ["Token"])
    # "all sessions for user X" and the expiry sweep
    op.create_index("ix_Sessions_UserID", "Sessions", ["UserID"])
    op.create_index("ix_Sessions_Expire_at", "Sessions", ["Expire_at"])


def downgrade() -> None:
    op.drop_index("ix_Sessions_Expire_at", table_name="Sessions")
    op.drop_index("ix_Sessions_UserID", table_name="Sessions")
    op.drop_index("ix_Sessions_Token", table_name="Sessions")
    op.drop_table("Sessions")
    op.drop_index("ix_Users_username", table_name="Users")
    op.drop_table("Users")
