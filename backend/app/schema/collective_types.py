"""Controlled collective type system."""

from __future__ import annotations


USER = "USER"
ORGANIZATION = "ORGANIZATION"
COLLECTIVE = "COLLECTIVE"
FUND = "FUND"
PROJECT = "PROJECT"
EVENT = "EVENT"

COLLECTIVE_TYPE_VALUES: tuple[str, ...] = (
    USER,
    ORGANIZATION,
    COLLECTIVE,
    FUND,
    PROJECT,
    EVENT,
)

# Names given to profiles created without a real identity (guest checkout,
# incognito contributions). They never count as a real profile name.
DEFAULT_GUEST_NAME = "Guest"
INCOGNITO_NAME = "Incognito"
PLACEHOLDER_NAMES = frozenset({DEFAULT_GUEST_NAME, INCOGNITO_NAME})


def is_placeholder_name(name: str | None) -> bool:
    """Return True when a profile name is missing or one of the placeholder names."""

    cleaned = _clean_text(name)
    return not cleaned or cleaned in PLACEHOLDER_NAMES


def _clean_text(value: str | None) -> str:
    if not value:
        return ""
    return " ".join(value.strip().split())
