"""Ledger data source: read, validate, and cache the transaction ledger.

The ledger is a JSON document shaped like::

    {
        "customers": [{"id": "u1", "name": "Ada"}, ...],
        "transactions": [{"id": "t1", "userId": "u1", "amount": 120.0,
                          "date": "2025-09-10T00:00:00Z"}, ...]
    }

``LedgerSource`` keeps the last good snapshot together with the store's
modification timestamp and only re-reads when that timestamp changes. The
snapshot and timestamp live in one tuple that is swapped in a single
assignment, so concurrent readers see either the old or the new snapshot.
A failed reload leaves the previous entry in place and propagates the error;
the next call stats the store again and retries.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Protocol

from rewards_core.exceptions import DataUnavailableError, MalformedDataError
from rewards_core.identity import canonical_id, ensure_id
from rewards_core.types import Customer, LedgerDataset, Transaction

logger = logging.getLogger(__name__)

# Stored key -> aliases accepted for it
CUSTOMER_REF_KEYS = ("userId", "customerId")
DATE_KEYS = ("date", "timestamp")


class LedgerStore(Protocol):
    """Backing store for the ledger document."""

    def modified_at(self) -> Any:
        """Return a value that changes whenever the stored document changes."""
        ...

    def read_bytes(self) -> bytes:
        """Return the full stored document."""
        ...


class JsonFileStore:
    """Ledger stored as a JSON file on the local filesystem."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def modified_at(self) -> int:
        try:
            return self.path.stat().st_mtime_ns
        except FileNotFoundError as e:
            raise DataUnavailableError(f"Ledger file not found: {self.path}") from e
        except OSError as e:
            raise DataUnavailableError(f"Cannot stat ledger file {self.path}: {e}") from e

    def read_bytes(self) -> bytes:
        try:
            return self.path.read_bytes()
        except FileNotFoundError as e:
            raise DataUnavailableError(f"Ledger file not found: {self.path}") from e
        except OSError as e:
            raise DataUnavailableError(f"Cannot read ledger file {self.path}: {e}") from e

    def __repr__(self) -> str:
        return f"JsonFileStore({str(self.path)!r})"


class LedgerSource:
    """Cached accessor for a ledger store.

    Example:
        >>> source = LedgerSource(JsonFileStore("data/transactions.json"))
        >>> dataset = source.load()
        >>> len(dataset.customers)
        3
    """

    def __init__(self, store: LedgerStore) -> None:
        self.store = store
        self._entry: tuple[Any, LedgerDataset] | None = None

    def load(self) -> LedgerDataset:
        """Return the current ledger snapshot, re-reading only if the store changed.

        Raises:
            DataUnavailableError: If the store cannot be stat'ed or read.
            MalformedDataError: If the document is not a valid ledger.
        """
        try:
            modified_at = self.store.modified_at()
        except OSError as e:
            raise DataUnavailableError(f"Cannot stat ledger store {self.store!r}: {e}") from e

        entry = self._entry
        if entry is not None and entry[0] == modified_at:
            logger.debug("Ledger unchanged since last load, using cached snapshot")
            return entry[1]

        try:
            raw = self.store.read_bytes()
        except OSError as e:
            raise DataUnavailableError(f"Cannot read ledger store {self.store!r}: {e}") from e

        dataset = parse_ledger(raw)
        self._entry = (modified_at, dataset)

        logger.info(
            "Loaded ledger: %d customers, %d transactions (%d skipped, %d unscored)",
            len(dataset.customers),
            len(dataset.transactions),
            dataset.skipped_transactions,
            dataset.unscored_transactions,
        )
        return dataset


def parse_ledger(raw: bytes | str) -> LedgerDataset:
    """Parse and validate a ledger document.

    Identifiers are normalized here, once per record, so synthesized ids stay
    stable for as long as the snapshot is cached.

    Args:
        raw: JSON document.

    Returns:
        LedgerDataset with customers and transactions in stored order.

    Raises:
        MalformedDataError: If the document is not JSON, is not an object, or
            lacks a ``customers`` or ``transactions`` list.
    """
    try:
        payload = json.loads(raw, parse_float=Decimal)
    except ValueError as e:
        raise MalformedDataError(f"Ledger is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise MalformedDataError("Invalid data structure: ledger must be a JSON object")

    missing = [key for key in ("customers", "transactions") if not isinstance(payload.get(key), list)]
    if missing:
        raise MalformedDataError(
            f"Invalid data structure: missing customers or transactions ({', '.join(missing)})"
        )

    customers: list[Customer] = []
    for idx, record in enumerate(payload["customers"]):
        if not isinstance(record, Mapping):
            logger.warning("Skipping customer at index %d: not an object", idx)
            continue
        customers.append(_build_customer(record))

    transactions: list[Transaction] = []
    skipped = 0
    for idx, record in enumerate(payload["transactions"]):
        if not isinstance(record, Mapping):
            logger.debug("Skipping transaction at index %d: not an object", idx)
            skipped += 1
            continue
        transactions.append(_build_transaction(record))

    unscored = sum(1 for txn in transactions if txn.amount is None)
    if skipped:
        logger.warning("Skipped %d transaction(s) that are not objects", skipped)
    if unscored:
        logger.warning("%d transaction(s) have no usable amount and earn no points", unscored)

    return LedgerDataset(
        customers=tuple(customers),
        transactions=tuple(transactions),
        skipped_transactions=skipped,
        unscored_transactions=unscored,
    )


def parse_amount(value: Any) -> Decimal | None:
    """Parse a stored amount, returning None when it is not a finite number.

    Examples:
        >>> parse_amount(120)
        Decimal('120')
        >>> parse_amount("45.50")
        Decimal('45.50')
        >>> parse_amount("n/a") is None
        True
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, (float, str)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            return None
    else:
        return None
    return amount if amount.is_finite() else None


def _first_present(record: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in record:
            return record[key]
    return None


def _build_customer(record: Mapping[str, Any]) -> Customer:
    source_id = record.get("id")
    name = record.get("name")
    return Customer(
        id=ensure_id({"id": canonical_id(source_id)}),
        name="" if name is None else str(name),
        source_id=source_id,
        raw=dict(record),
    )


def _build_transaction(record: Mapping[str, Any]) -> Transaction:
    amount = parse_amount(record.get("amount"))
    if amount is None:
        logger.debug("Transaction %r has unusable amount %r", record.get("id"), record.get("amount"))

    return Transaction(
        id=ensure_id({"id": canonical_id(record.get("id"))}),
        customer_id=canonical_id(_first_present(record, CUSTOMER_REF_KEYS)),
        amount=amount,
        timestamp=_first_present(record, DATE_KEYS),
        raw=dict(record),
    )
