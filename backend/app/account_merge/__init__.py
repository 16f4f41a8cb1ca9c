"""Account merge registries and rules."""

from app.account_merge.registry import ACCOUNT_FIELDS, USER_FIELDS, MovableField
from app.account_merge.rules import (
    IneligibleMergeError,
    MissingLinkedIdentityError,
    check_merge_eligibility,
    merged_profile_fields,
    merged_slug,
)

__all__ = [
    "ACCOUNT_FIELDS",
    "USER_FIELDS",
    "IneligibleMergeError",
    "MissingLinkedIdentityError",
    "MovableField",
    "check_merge_eligibility",
    "merged_profile_fields",
    "merged_slug",
]
