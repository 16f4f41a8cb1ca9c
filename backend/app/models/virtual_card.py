"""Virtual card ORM model."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, CreatedAtMixin, IdMixin


class VirtualCard(Base, IdMixin, CreatedAtMixin):
    """Card issued by `host_collective` for spending on behalf of `collective`."""

    __tablename__ = "virtual_cards"

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last4: Mapped[str | None] = mapped_column(String(4), nullable=True)
    collective_id: Mapped[int] = mapped_column(
        ForeignKey("collectives.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    host_collective_id: Mapped[int] = mapped_column(
        ForeignKey("collectives.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
    )
