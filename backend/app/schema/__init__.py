"""Domain vocabulary shared by models and services."""

from app.schema.collective_types import (
    COLLECTIVE_TYPE_VALUES,
    DEFAULT_GUEST_NAME,
    INCOGNITO_NAME,
    USER,
    is_placeholder_name,
)

__all__ = [
    "COLLECTIVE_TYPE_VALUES",
    "DEFAULT_GUEST_NAME",
    "INCOGNITO_NAME",
    "USER",
    "is_placeholder_name",
]
