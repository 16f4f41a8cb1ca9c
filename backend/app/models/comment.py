"""Comment ORM model."""

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, CreatedAtMixin, IdMixin


class Comment(Base, IdMixin, CreatedAtMixin):
    """Comment posted on an account, expense or conversation."""

    __tablename__ = "comments"

    html: Mapped[str] = mapped_column(Text, nullable=False)
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
