"""SQLAlchemy metadata registry import for Alembic."""

from app.models import Collective, MigrationLog, User
from app.models.base import Base

# Importing app.models registers every table on Base.metadata.
__all__ = ["Base", "Collective", "MigrationLog", "User"]
