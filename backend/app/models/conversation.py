"""Conversation ORM model."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, CreatedAtMixin, IdMixin


class Conversation(Base, IdMixin, CreatedAtMixin):
    """Discussion thread hosted on an account page."""

    __tablename__ = "conversations"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    collective_id: Mapped[int] = mapped_column(
        ForeignKey("collectives.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    from_collective_id: Mapped[int] = mapped_column(
        ForeignKey("collectives.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    created_by_user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
    )
