"""Identifier normalization for customers and transactions.

Two helpers:

- ``canonical_id`` turns a stored identifier into the string form used for
  every comparison (customer lookups, transaction-to-customer joins).
- ``ensure_id`` returns an entity's id when it already has a usable one and
  synthesizes a random UUID otherwise.

``ensure_id`` is not memoized. Calling it twice on an id-less entity yields
two different ids, so callers must synthesize once per entity and keep the
result (the ledger loader does this when it builds records).

Examples:
    >>> canonical_id(7)
    '7'
    >>> canonical_id("u1")
    'u1'
    >>> canonical_id(None) is None
    True
    >>> ensure_id({"id": "u1"})
    'u1'
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from decimal import Decimal
from typing import Any


def canonical_id(value: Any) -> str | None:
    """Return the canonical string form of a stored identifier.

    Args:
        value: Raw identifier as stored (string, integer, Decimal, or anything else).

    Returns:
        Non-empty strings unchanged, integers and integral Decimals as their
        decimal string, and None for everything else (None, empty string,
        booleans, fractional numbers, containers). None never matches anything.

    Examples:
        >>> canonical_id(Decimal("42"))
        '42'
        >>> canonical_id("") is None
        True
        >>> canonical_id(True) is None
        True
    """
    if isinstance(value, str):
        return value or None
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, Decimal):
        if value.is_finite() and value == value.to_integral_value():
            return str(int(value))
        return None
    return None


def ensure_id(entity: Any) -> str:
    """Return the entity's id, or a fresh UUID4 string if it has none.

    The entity may be a mapping (``entity["id"]``) or any object with an
    ``id`` attribute. Only a non-empty string counts as an existing id.

    Args:
        entity: Customer or transaction record.

    Returns:
        The existing id, or a newly generated one.
    """
    if isinstance(entity, Mapping):
        current = entity.get("id")
    else:
        current = getattr(entity, "id", None)

    if isinstance(current, str) and current:
        return current
    return str(uuid.uuid4())
