"""Tests for identifier normalization."""

import uuid
from decimal import Decimal
from types import SimpleNamespace

import pytest

from rewards_core.identity import canonical_id, ensure_id


def test_ensure_id_returns_existing_string_id() -> None:
    customer = {"id": "u1", "name": "Test"}
    assert ensure_id(customer) == "u1"
    assert ensure_id(customer) == "u1"


def test_ensure_id_reads_attribute_ids() -> None:
    assert ensure_id(SimpleNamespace(id="t1")) == "t1"


@pytest.mark.parametrize("entity", [{}, {"id": ""}, {"id": None}, {"id": 123}, SimpleNamespace()])
def test_ensure_id_synthesizes_uuid4(entity) -> None:
    generated = ensure_id(entity)
    assert isinstance(generated, str)
    assert uuid.UUID(generated).version == 4


def test_ensure_id_is_not_memoized() -> None:
    entity = {"amount": 100}
    assert ensure_id(entity) != ensure_id(entity)


def test_ensure_id_does_not_mutate_entity() -> None:
    entity = {"name": "No Id"}
    ensure_id(entity)
    assert entity == {"name": "No Id"}


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("u1", "u1"),
        (7, "7"),
        (Decimal("42"), "42"),
        (Decimal("42.0"), "42"),
        ("", None),
        (None, None),
        (True, None),
        (Decimal("1.5"), None),
        ([1], None),
    ],
)
def test_canonical_id(value, expected) -> None:
    assert canonical_id(value) == expected


def test_canonical_id_matches_numeric_and_string_forms() -> None:
    assert canonical_id(7) == canonical_id("7")
