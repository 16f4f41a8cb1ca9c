"""Legal document ORM model."""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, CreatedAtMixin, IdMixin


class LegalDocument(Base, IdMixin, CreatedAtMixin):
    """Tax form requested from or submitted by an account for one year."""

    __tablename__ = "legal_documents"

    year: Mapped[int] = mapped_column(Integer, nullable=False)
    document_type: Mapped[str] = mapped_column(String(32), default="US_TAX_FORM", nullable=False)
    request_status: Mapped[str] = mapped_column(String(32), default="NOT_REQUESTED", nullable=False)
    collective_id: Mapped[int] = mapped_column(
        ForeignKey("collectives.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
