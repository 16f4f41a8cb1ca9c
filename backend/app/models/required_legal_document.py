"""Required legal document ORM model."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, CreatedAtMixin, IdMixin


class RequiredLegalDocument(Base, IdMixin, CreatedAtMixin):
    """Document type a host requires from the accounts it pays."""

    __tablename__ = "required_legal_documents"

    document_type: Mapped[str] = mapped_column(String(32), default="US_TAX_FORM", nullable=False)
    host_collective_id: Mapped[int] = mapped_column(
        ForeignKey("collectives.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
