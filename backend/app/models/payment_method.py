"""Payment method ORM model."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, CreatedAtMixin, IdMixin


class PaymentMethod(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "payment_methods"

    service: Mapped[str] = mapped_column(String(32), default="stripe", nullable=False)
    type: Mapped[str] = mapped_column(String(32), default="creditcard", nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    collective_id: Mapped[int | None] = mapped_column(
        ForeignKey("collectives.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
    )
    created_by_user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
    )
