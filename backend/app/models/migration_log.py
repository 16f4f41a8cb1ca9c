"""Migration log model."""

from enum import Enum

from sqlalchemy import JSON, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, CreatedAtMixin, IdMixin


class MigrationLogType(str, Enum):
    MERGE_ACCOUNTS = "MERGE_ACCOUNTS"


class MigrationLog(Base, IdMixin, CreatedAtMixin):
    """Write-once record of a data migration and everything it touched."""

    __tablename__ = "migration_logs"

    type: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    created_by_user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
    )
    data: Mapped[dict[str, object]] = mapped_column(JSON, default=dict, nullable=False)
