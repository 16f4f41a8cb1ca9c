"""Notification subscription ORM model."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, CreatedAtMixin, IdMixin


class Notification(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "notifications"

    channel: Mapped[str] = mapped_column(String(32), default="email", nullable=False)
    type: Mapped[str] = mapped_column(String(128), nullable=False)
    active: Mapped[bool] = mapped_column(default=True, nullable=False)
    collective_id: Mapped[int | None] = mapped_column(
        ForeignKey("collectives.id", ondelete="CASCADE"),
        index=True,
        nullable=True,
    )
    user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=True,
    )
