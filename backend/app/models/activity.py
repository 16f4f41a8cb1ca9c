"""Activity ORM model."""

from sqlalchemy import JSON, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, CreatedAtMixin, IdMixin


class Activity(Base, IdMixin, CreatedAtMixin):
    """Activity feed entry."""

    __tablename__ = "activities"

    type: Mapped[str] = mapped_column(String(128), nullable=False)
    collective_id: Mapped[int | None] = mapped_column(
        ForeignKey("collectives.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
    )
    user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
    )
    data: Mapped[dict[str, object]] = mapped_column(JSON, default=dict, nullable=False)
