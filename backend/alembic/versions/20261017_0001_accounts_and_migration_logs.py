"""accounts, users and migration logs

Revision ID: 20261017_0001
Revises:
Create Date: 2026-10-17 00:00:01
"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261017_0001"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "collectives",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("country_iso", sa.String(length=2), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("data", sa.JSON(), nullable=False),
        sa.Column("parent_collective_id", sa.Integer(), nullable=True),
        sa.Column("host_collective_id", sa.Integer(), nullable=True),
        sa.Column("created_by_user_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "type IN ('USER', 'ORGANIZATION', 'COLLECTIVE', 'FUND', 'PROJECT', 'EVENT')",
            name="ck_collectives_type",
        ),
        sa.ForeignKeyConstraint(["parent_collective_id"], ["collectives.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["host_collective_id"], ["collectives.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_collectives_type", "collectives", ["type"], unique=False)
    op.create_index("ix_collectives_parent_collective_id", "collectives", ["parent_collective_id"], unique=False)
    op.create_index("ix_collectives_host_collective_id", "collectives", ["host_collective_id"], unique=False)
    op.create_index("ix_collectives_created_by_user_id", "collectives", ["created_by_user_id"], unique=False)
    op.create_index(
        "uq_collectives_slug_active",
        "collectives",
        ["slug"],
        unique=True,
        postgresql_where=sa.text("deleted_at IS NULL"),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("collective_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["collective_id"], ["collectives.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
        sa.UniqueConstraint("collective_id"),
    )
    op.create_foreign_key(
        "fk_collectives_created_by_user_id",
        "collectives",
        "users",
        ["created_by_user_id"],
        ["id"],
        ondelete="SET NULL",
    )

    op.create_table(
        "migration_logs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("type", sa.String(length=64), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("created_by_user_id", sa.Integer(), nullable=True),
        sa.Column("data", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["created_by_user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_migration_logs_type", "migration_logs", ["type"], unique=False)
    op.create_index("ix_migration_logs_created_by_user_id", "migration_logs", ["created_by_user_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_migration_logs_created_by_user_id", table_name="migration_logs")
    op.drop_index("ix_migration_logs_type", table_name="migration_logs")
    op.drop_table("migration_logs")

    op.drop_constraint("fk_collectives_created_by_user_id", "collectives", type_="foreignkey")
    op.drop_table("users")

    op.drop_index("uq_collectives_slug_active", table_name="collectives")
    op.drop_index("ix_collectives_created_by_user_id", table_name="collectives")
    op.drop_index("ix_collectives_host_collective_id", table_name="collectives")
    op.drop_index("ix_collectives_parent_collective_id", table_name="collectives")
    op.drop_index("ix_collectives_type", table_name="collectives")
    op.drop_table("collectives")
