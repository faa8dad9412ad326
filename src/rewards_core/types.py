"""Shared record types for the rewards pipeline.

Ledger records (``Customer``, ``Transaction``) are produced once by the
ledger loader and never mutated. Result records (``CustomerSummary``,
``CustomerDetail``, ``EnrichedTransaction``) are built fresh on every query.
Each result type has ``to_dict()`` returning the camelCase JSON shape served
by the HTTP adapter.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any


def to_jsonable(value: Any) -> Any:
    """Convert Decimals (also nested in lists/dicts) into JSON numbers."""
    if isinstance(value, Decimal):
        if value == value.to_integral_value():
            return int(value)
        return float(value)
    if isinstance(value, Mapping):
        return {key: to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


@dataclass(frozen=True)
class Customer:
    """A loyalty-program customer.

    Attributes:
        id: Stable, non-empty identifier (stored id in canonical form, or a
            UUID synthesized at load time).
        name: Display name.
        source_id: Identifier exactly as stored, used for existence lookups.
        raw: The stored record, unchanged.
    """

    id: str
    name: str
    source_id: Any = None
    raw: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return the stored record, or the normalized fields when there is none."""
        if self.raw:
            return to_jsonable(dict(self.raw))
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class Transaction:
    """A purchase from the ledger.

    Attributes:
        id: Stable, non-empty identifier.
        customer_id: Canonical id of the referenced customer, or None when the
            stored reference is unusable. Not required to resolve.
        amount: Purchase amount, or None when the stored amount is not a
            finite number. Such transactions earn no points and are left out
            of windowed queries.
        timestamp: Date value as stored. Parsed lazily by the time-window
            filter; invalid values are tolerated here.
        raw: The stored record, unchanged (customer reference and date keep
            whichever key they were stored under).
    """

    id: str
    customer_id: str | None
    amount: Decimal | None
    timestamp: Any
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class LedgerDataset:
    """One validated snapshot of the ledger.

    Attributes:
        customers: Customers in stored order.
        transactions: Transactions in stored order.
        skipped_transactions: Non-object entries dropped at load time.
        unscored_transactions: Transactions kept with an unusable amount.
    """

    customers: tuple[Customer, ...]
    transactions: tuple[Transaction, ...]
    skipped_transactions: int = 0
    unscored_transactions: int = 0


@dataclass
class MonthlyBreakdown:
    """Points and spend accumulated for one ``YYYY-MM`` bucket."""

    points: int = 0
    amount_spent: Decimal = Decimal(0)

    def to_dict(self) -> dict[str, Any]:
        return {"points": self.points, "amountSpent": to_jsonable(self.amount_spent)}


@dataclass
class CustomerSummary:
    """Windowed points summary for one customer.

    Attributes:
        customer_id: Customer id.
        name: Customer name.
        total_points: Sum of points over the customer's windowed transactions.
        total_amount_spent: Sum of amounts over the same transactions.
        monthly_points: Breakdown keyed by ``YYYY-MM``, chronological order.
    """

    customer_id: str
    name: str
    total_points: int = 0
    total_amount_spent: Decimal = Decimal(0)
    monthly_points: dict[str, MonthlyBreakdown] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "customerId": self.customer_id,
            "name": self.name,
            "totalPoints": self.total_points,
            "totalAmountSpent": to_jsonable(self.total_amount_spent),
            "monthlyPoints": {
                year_month: entry.to_dict() for year_month, entry in self.monthly_points.items()
            },
        }


@dataclass(frozen=True)
class TransactionPoints:
    """One line of a customer's transaction history."""

    transaction_id: str
    amount: Decimal
    timestamp: Any
    points: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "transactionId": self.transaction_id,
            "amount": to_jsonable(self.amount),
            "date": self.timestamp,
            "points": self.points,
        }


@dataclass
class CustomerDetail:
    """A customer's windowed transaction history."""

    customer_id: str
    customer_name: str
    transactions: list[TransactionPoints] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "customerId": self.customer_id,
            "customerName": self.customer_name,
            "transactions": [txn.to_dict() for txn in self.transactions],
        }


@dataclass(frozen=True)
class EnrichedTransaction:
    """A raw transaction with its points and resolved customer.

    ``customer`` is None for orphaned transactions. ``to_dict`` returns the
    stored record with only ``id`` (the normalized id), ``points`` and
    ``customer`` set on top of it.
    """

    transaction: Transaction
    points: int
    customer: Customer | None

    def to_dict(self) -> dict[str, Any]:
        txn = self.transaction
        if txn.raw:
            stored = dict(txn.raw)
        else:
            stored = {"userId": txn.customer_id, "amount": txn.amount, "date": txn.timestamp}
        payload = {
            **stored,
            "id": txn.id,
            "points": self.points,
            "customer": self.customer.to_dict() if self.customer is not None else None,
        }
        return to_jsonable(payload)
