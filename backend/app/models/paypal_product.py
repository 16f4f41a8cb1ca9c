"""PayPal product ORM model."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, CreatedAtMixin, IdMixin


class PaypalProduct(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "paypal_products"

    paypal_product_id: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    collective_id: Mapped[int] = mapped_column(
        ForeignKey("collectives.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    tier_id: Mapped[int | None] = mapped_column(
        ForeignKey("tiers.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
    )
