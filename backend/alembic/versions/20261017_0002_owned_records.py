"""records owned by accounts and users

Revision ID: 20261017_0002
Revises: 20261017_0001
Create Date: 2026-10-17 00:00:02
"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261017_0002"
down_revision: str | None = "20261017_0001"
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


# (table, column) pairs indexed for merge lookups.
_INDEXED_COLUMNS = [
    ("activities", "collective_id"),
    ("activities", "user_id"),
    ("applications", "collective_id"),
    ("applications", "created_by_user_id"),
    ("comments", "collective_id"),
    ("comments", "from_collective_id"),
    ("comments", "created_by_user_id"),
    ("connected_accounts", "collective_id"),
    ("conversations", "collective_id"),
    ("conversations", "from_collective_id"),
    ("conversations", "created_by_user_id"),
    ("conversation_followers", "conversation_id"),
    ("conversation_followers", "user_id"),
    ("emoji_reactions", "comment_id"),
    ("emoji_reactions", "from_collective_id"),
    ("emoji_reactions", "user_id"),
    ("expenses", "collective_id"),
    ("expenses", "from_collective_id"),
    ("expenses", "user_id"),
    ("expense_attached_files", "expense_id"),
    ("expense_attached_files", "created_by_user_id"),
    ("expense_items", "expense_id"),
    ("expense_items", "created_by_user_id"),
    ("host_applications", "collective_id"),
    ("host_applications", "host_collective_id"),
    ("legal_documents", "collective_id"),
    ("required_legal_documents", "host_collective_id"),
    ("members", "collective_id"),
    ("members", "member_collective_id"),
    ("members", "created_by_user_id"),
    ("member_invitations", "collective_id"),
    ("member_invitations", "member_collective_id"),
    ("member_invitations", "created_by_user_id"),
    ("notifications", "collective_id"),
    ("notifications", "user_id"),
    ("orders", "collective_id"),
    ("orders", "from_collective_id"),
    ("orders", "created_by_user_id"),
    ("payment_methods", "collective_id"),
    ("payment_methods", "created_by_user_id"),
    ("payout_methods", "collective_id"),
    ("payout_methods", "created_by_user_id"),
    ("tiers", "collective_id"),
    ("paypal_products", "collective_id"),
    ("paypal_products", "tier_id"),
    ("transactions", "collective_id"),
    ("transactions", "from_collective_id"),
    ("transactions", "using_gift_card_from_collective_id"),
    ("transactions", "created_by_user_id"),
    ("updates", "collective_id"),
    ("updates", "from_collective_id"),
    ("updates", "created_by_user_id"),
    ("virtual_cards", "collective_id"),
    ("virtual_cards", "host_collective_id"),
    ("virtual_cards", "user_id"),
]


def _id() -> sa.Column:
    return sa.Column("id", sa.Integer(), autoincrement=True, nullable=False)


def _created_at() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False)


def upgrade() -> None:
    op.create_table(
        "activities",
        _id(),
        sa.Column("type", sa.String(length=128), nullable=False),
        sa.Column("collective_id", sa.Integer(), nullable=True),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("data", sa.JSON(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["collective_id"], ["collectives.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "applications",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("collective_id", sa.Integer(), nullable=True),
        sa.Column("created_by_user_id", sa.Integer(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["collective_id"], ["collectives.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["created_by_user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "comments",
        _id(),
        sa.Column("html", sa.Text(), nullable=False),
        sa.Column("collective_id", sa.Integer(), nullable=False),
        sa.Column("from_collective_id", sa.Integer(), nullable=False),
        sa.Column("created_by_user_id", sa.Integer(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["collective_id"], ["collectives.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["from_collective_id"], ["collectives.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["created_by_user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "connected_accounts",
        _id(),
        sa.Column("service", sa.String(length=64), nullable=False),
        sa.Column("username", sa.String(length=255), nullable=True),
        sa.Column("collective_id", sa.Integer(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["collective_id"], ["collectives.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "conversations",
        _id(),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("collective_id", sa.Integer(), nullable=False),
        sa.Column("from_collective_id", sa.Integer(), nullable=False),
        sa.Column("created_by_user_id", sa.Integer(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["collective_id"], ["collectives.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["from_collective_id"], ["collectives.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["created_by_user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "conversation_followers",
        _id(),
        sa.Column("conversation_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["conversation_id"], ["conversations.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "emoji_reactions",
        _id(),
        sa.Column("emoji", sa.String(length=16), nullable=False),
        sa.Column("comment_id", sa.Integer(), nullable=True),
        sa.Column("from_collective_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["from_collective_id"], ["collectives.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "expenses",
        _id(),
        sa.Column("description", sa.String(length=255), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("collective_id", sa.Integer(), nullable=False),
        sa.Column("from_collective_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["collective_id"], ["collectives.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["from_collective_id"], ["collectives.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "expense_attached_files",
        _id(),
        sa.Column("url", sa.String(length=1024), nullable=False),
        sa.Column("expense_id", sa.Integer(), nullable=False),
        sa.Column("created_by_user_id", sa.Integer(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["expense_id"], ["expenses.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["created_by_user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "expense_items",
        _id(),
        sa.Column("description", sa.String(length=255), nullable=True),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("expense_id", sa.Integer(), nullable=False),
        sa.Column("created_by_user_id", sa.Integer(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["expense_id"], ["expenses.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["created_by_user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "host_applications",
        _id(),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("collective_id", sa.Integer(), nullable=False),
        sa.Column("host_collective_id", sa.Integer(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["collective_id"], ["collectives.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["host_collective_id"], ["collectives.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "legal_documents",
        _id(),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("document_type", sa.String(length=32), nullable=False),
        sa.Column("request_status", sa.String(length=32), nullable=False),
        sa.Column("collective_id", sa.Integer(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["collective_id"], ["collectives.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "required_legal_documents",
        _id(),
        sa.Column("document_type", sa.String(length=32), nullable=False),
        sa.Column("host_collective_id", sa.Integer(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["host_collective_id"], ["collectives.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    for table in ("members", "member_invitations"):
        op.create_table(
            table,
            _id(),
            sa.Column("role", sa.String(length=32), nullable=False),
            sa.Column("collective_id", sa.Integer(), nullable=False),
            sa.Column("member_collective_id", sa.Integer(), nullable=False),
            sa.Column("created_by_user_id", sa.Integer(), nullable=True),
            _created_at(),
            sa.ForeignKeyConstraint(["collective_id"], ["collectives.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["member_collective_id"], ["collectives.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["created_by_user_id"], ["users.id"], ondelete="SET NULL"),
            sa.PrimaryKeyConstraint("id"),
        )
    op.create_table(
        "notifications",
        _id(),
        sa.Column("channel", sa.String(length=32), nullable=False),
        sa.Column("type", sa.String(length=128), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("collective_id", sa.Integer(), nullable=True),
        sa.Column("user_id", sa.Integer(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["collective_id"], ["collectives.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "orders",
        _id(),
        sa.Column("total_amount", sa.Integer(), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("collective_id", sa.Integer(), nullable=False),
        sa.Column("from_collective_id", sa.Integer(), nullable=False),
        sa.Column("created_by_user_id", sa.Integer(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["collective_id"], ["collectives.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["from_collective_id"], ["collectives.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["created_by_user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "payment_methods",
        _id(),
        sa.Column("service", sa.String(length=32), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("collective_id", sa.Integer(), nullable=True),
        sa.Column("created_by_user_id", sa.Integer(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["collective_id"], ["collectives.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["created_by_user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "payout_methods",
        _id(),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("data", sa.JSON(), nullable=False),
        sa.Column("collective_id", sa.Integer(), nullable=False),
        sa.Column("created_by_user_id", sa.Integer(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["collective_id"], ["collectives.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["created_by_user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "tiers",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=True),
        sa.Column("collective_id", sa.Integer(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["collective_id"], ["collectives.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "paypal_products",
        _id(),
        sa.Column("paypal_product_id", sa.String(length=255), nullable=False),
        sa.Column("collective_id", sa.Integer(), nullable=False),
        sa.Column("tier_id", sa.Integer(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["collective_id"], ["collectives.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tier_id"], ["tiers.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("paypal_product_id"),
    )
    op.create_table(
        "transactions",
        _id(),
        sa.Column("kind", sa.String(length=16), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("collective_id", sa.Integer(), nullable=False),
        sa.Column("from_collective_id", sa.Integer(), nullable=True),
        sa.Column("using_gift_card_from_collective_id", sa.Integer(), nullable=True),
        sa.Column("created_by_user_id", sa.Integer(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["collective_id"], ["collectives.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["from_collective_id"], ["collectives.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["using_gift_card_from_collective_id"], ["collectives.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["created_by_user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "updates",
        _id(),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("collective_id", sa.Integer(), nullable=False),
        sa.Column("from_collective_id", sa.Integer(), nullable=False),
        sa.Column("created_by_user_id", sa.Integer(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["collective_id"], ["collectives.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["from_collective_id"], ["collectives.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["created_by_user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "virtual_cards",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("last4", sa.String(length=4), nullable=True),
        sa.Column("collective_id", sa.Integer(), nullable=False),
        sa.Column("host_collective_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["collective_id"], ["collectives.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["host_collective_id"], ["collectives.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )

    for table, column in _INDEXED_COLUMNS:
        op.create_index(f"ix_{table}_{column}", table, [column], unique=False)


def downgrade() -> None:
    for table, column in reversed(_INDEXED_COLUMNS):
        op.drop_index(f"ix_{table}_{column}", table_name=table)

    for table in (
        "virtual_cards",
        "updates",
        "transactions",
        "paypal_products",
        "tiers",
        "payout_methods",
        "payment_methods",
        "orders",
        "notifications",
        "member_invitations",
        "members",
        "required_legal_documents",
        "legal_documents",
        "host_applications",
        "expense_items",
        "expense_attached_files",
        "expenses",
        "emoji_reactions",
        "conversation_followers",
        "conversations",
        "connected_accounts",
        "comments",
        "applications",
        "activities",
    ):
        op.drop_table(table)
