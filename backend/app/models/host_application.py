"""Host application ORM model."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, CreatedAtMixin, IdMixin


class HostApplication(Base, IdMixin, CreatedAtMixin):
    """Request from `collective` to be fiscally hosted by `host_collective`."""

    __tablename__ = "host_applications"

    status: Mapped[str] = mapped_column(String(32), default="PENDING", nullable=False)
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
