"""Migration log response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class MigrationLogRead(BaseModel):
    """Serialized migration log record."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    type: str
    description: str
    created_by_user_id: int | None
    data: dict[str, object]
    created_at: datetime
