"""Helpers for multi-select tag fields (lifestyle, interests, amenities)."""

from typing import Iterable, List


def toggle_tag(tags: Iterable[str], value: str) -> List[str]:
    """Return a new list with value removed if present, appended otherwise.

    Order of the remaining tags is preserved, so toggling the same value
    twice gives back the original list.
    """
    current = list(tags or [])
    if value in current:
        return [tag for tag in current if tag != value]
    return current + [value]


def unique_tags(tags: Iterable[str]) -> List[str]:
    """Drop blanks and duplicates while keeping first-seen order."""
    result = []
    seen = set()
    for tag in tags or []:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.add(tag)
            result.append(tag)
    return result


def invalid_tags(tags: Iterable[str], allowed: Iterable[str]) -> List[str]:
    """Return the tags that are not among the allowed options."""
    allowed_set = set(allowed)
    return [tag for tag in tags or [] if tag not in allowed_set]


def matches_any(wanted: Iterable[str], have: Iterable[str]) -> bool:
    """True when no tags are wanted or at least one wanted tag is present."""
    wanted = list(wanted or [])
    if not wanted:
        return True
    have_set = set(have or [])
    return any(tag in have_set for tag in wanted)


def matches_all(wanted: Iterable[str], have: Iterable[str]) -> bool:
    """True when every wanted tag is present, ignoring case."""
    have_lower = {tag.lower() for tag in have or []}
    return all(tag.lower() in have_lower for tag in wanted or [])
