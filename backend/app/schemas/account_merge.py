"""Account merge result schemas."""

from pydantic import BaseModel, Field


class MergeAccountsResult(BaseModel):
    """Summary of a completed account merge."""

    migration_log_id: int
    from_collective_id: int
    into_collective_id: int
    from_user_id: int | None = None
    into_user_id: int | None = None
    items_moved: int
    user_items_moved: int = 0
    profile_fields_updated: list[str] = Field(default_factory=list)
