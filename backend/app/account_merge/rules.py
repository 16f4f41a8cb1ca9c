"""Pure merge rules: eligibility checks and profile field reconciliation."""

from __future__ import annotations

from app.models.collective import Collective
from app.schema.collective_types import is_placeholder_name


class IneligibleMergeError(ValueError):
    """The two accounts cannot be merged; nothing was written."""


class MissingLinkedIdentityError(RuntimeError):
    """An individual account has no user row attached to it."""


def check_merge_eligibility(
    source: Collective | None,
    destination: Collective | None,
) -> tuple[Collective, Collective]:
    """Raise IneligibleMergeError when `source` cannot be merged into `destination`.

    Retired (soft-deleted) accounts count as missing. Returns the checked pair.
    """

    if source is None or destination is None:
        raise IneligibleMergeError("Cannot merge profiles, one of them does not exist")
    if source.deleted_at is not None or destination.deleted_at is not None:
        raise IneligibleMergeError("Cannot merge profiles, one of them does not exist")
    if source.type != destination.type:
        raise IneligibleMergeError("Cannot merge accounts with different types")
    if source.id == destination.id:
        raise IneligibleMergeError("Cannot merge an account into itself")
    if source.id == destination.parent_collective_id:
        raise IneligibleMergeError("You can not merge an account with its parent")
    if source.id == destination.host_collective_id:
        raise IneligibleMergeError("You can not merge an account with its host")
    return source, destination


def merged_profile_fields(source: Collective, destination: Collective) -> dict[str, str]:
    """Return the destination profile fields that should be filled from `source`.

    Only placeholder values on the destination are replaced: a guest or
    incognito name, or a missing country/address. Real values are kept.
    """

    fields: dict[str, str] = {}
    if is_placeholder_name(destination.name) and not is_placeholder_name(source.name):
        fields["name"] = str(source.name)
    if source.country_iso and not destination.country_iso:
        fields["country_iso"] = source.country_iso
    if source.address and not destination.address:
        fields["address"] = source.address
    return fields


def merged_slug(slug: str, suffix: str) -> str:
    """Slug given to a retired account so the original can be claimed again."""

    return f"{slug}{suffix}"
