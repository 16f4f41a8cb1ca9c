"""Collective (account) ORM model."""

from sqlalchemy import JSON, CheckConstraint, ForeignKey, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, CreatedAtMixin, IdMixin, SoftDeleteMixin
from app.schema.collective_types import COLLECTIVE_TYPE_VALUES


class Collective(Base, IdMixin, CreatedAtMixin, SoftDeleteMixin):
    """Any profile able to own money, memberships and records."""

    __tablename__ = "collectives"
    __table_args__ = (
        CheckConstraint(
            "type IN (" + ", ".join(f"'{value}'" for value in COLLECTIVE_TYPE_VALUES) + ")",
            name="ck_collectives_type",
        ),
        Index(
            "uq_collectives_slug_active",
            "slug",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )

    type: Mapped[str] = mapped_column(String(32), index=True, nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    country_iso: Mapped[str | None] = mapped_column(String(2), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    data: Mapped[dict[str, object]] = mapped_column(JSON, default=dict, nullable=False)
    parent_collective_id: Mapped[int | None] = mapped_column(
        ForeignKey("collectives.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
    )
    host_collective_id: Mapped[int | None] = mapped_column(
        ForeignKey("collectives.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
    )
    created_by_user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL", use_alter=True, name="fk_collectives_created_by_user_id"),
        index=True,
        nullable=True,
    )
