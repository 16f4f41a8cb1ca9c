"""OAuth application ORM model."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, CreatedAtMixin, IdMixin


class Application(Base, IdMixin, CreatedAtMixin):
    """Third-party API application registered by an account."""

    __tablename__ = "applications"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    collective_id: Mapped[int | None] = mapped_column(
        ForeignKey("collectives.id", ondelete="CASCADE"),
        index=True,
        nullable=True,
    )
    created_by_user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
    )
