"""Eligibility filtering and deduplication for listing items.

Rules are evaluated in order and the first failing rule excludes the item:

1. ``streamable`` must be explicitly true
2. a playable ``stream_url`` must be present
3. ``policy`` must not be ``BLOCK`` (geo/rights restriction, any case)
4. ``access`` must not be ``blocked`` or ``preview`` (any case)

All functions here are pure; logging is informational only.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..core.enums import IneligibilityReason
from ..models import Item

logger = logging.getLogger(__name__)

BLOCKED_POLICIES = frozenset({"BLOCK"})
RESTRICTED_ACCESS = frozenset({"blocked", "preview"})


def ineligibility_reason(item: Item) -> IneligibilityReason | None:
    """Return the first rule ``item`` fails, or None if it is eligible."""
    if item.streamable is not True:
        return IneligibilityReason.NOT_STREAMABLE
    if not item.stream_url:
        return IneligibilityReason.NO_STREAM_URL
    if item.policy is not None and item.policy.upper() in BLOCKED_POLICIES:
        return IneligibilityReason.POLICY_BLOCKED
    if item.access is not None and item.access.lower() in RESTRICTED_ACCESS:
        return IneligibilityReason.ACCESS_RESTRICTED
    return None


def is_eligible(item: Item) -> bool:
    """Check if an item is available for playback."""
    reason = ineligibility_reason(item)
    if reason is not None:
        logger.debug("Item %r (%s) is ineligible: %s", item.id, item.title, reason.value)
        return False
    return True


def filter_eligible(items: Iterable[Item]) -> list[Item]:
    """Keep only eligible items, preserving order."""
    items = list(items)
    eligible = [item for item in items if is_eligible(item)]

    removed = len(items) - len(eligible)
    if removed:
        logger.debug("Filtered out %d ineligible items (%d remaining)", removed, len(eligible))
    return eligible


def deduplicate(items: Iterable[Item]) -> list[Item]:
    """Drop items whose id was already seen, keeping first occurrences in order."""
    seen: set[int | str] = set()
    unique: list[Item] = []
    total = 0
    for item in items:
        total += 1
        if item.id in seen:
            continue
        seen.add(item.id)
        unique.append(item)

    removed = total - len(unique)
    if removed:
        logger.debug("Removed %d duplicate items (%d unique remaining)", removed, len(unique))
    return unique


def filter_and_deduplicate(items: Iterable[Item]) -> list[Item]:
    """Filter, then deduplicate what survived the filter."""
    return deduplicate(filter_eligible(items))
