"""Aggregate windowed transactions into per-customer reward summaries.

This module joins transactions to customers on the canonical customer id and
rolls points and spend up per customer and per ``YYYY-MM`` month. All
functions are pure: they never modify the ledger records or the input
DataFrame, and they never raise for orphaned transactions or customers with
no purchases.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from decimal import Decimal

import pandas as pd

from rewards_core.points import calculate_points
from rewards_core.types import (
    Customer,
    CustomerDetail,
    CustomerSummary,
    EnrichedTransaction,
    MonthlyBreakdown,
    Transaction,
    TransactionPoints,
)

logger = logging.getLogger(__name__)

SUMMARY_FRAME_COLUMNS = ["customer_id", "name", "year_month", "points", "amount_spent"]


def _decimal_sum(values: pd.Series) -> Decimal:
    return sum(values, Decimal(0))


def score_transactions(filtered: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of the windowed transactions with a ``points`` column."""
    return filtered.assign(points=filtered["amount"].map(calculate_points))


def monthly_breakdown(filtered: pd.DataFrame) -> dict[str, dict[str, MonthlyBreakdown]]:
    """Roll windowed transactions up to customer × month.

    Args:
        filtered: Output of ``window.filter_recent``.

    Returns:
        ``{customer_id: {year_month: MonthlyBreakdown}}`` with months in
        chronological order. Rows with no customer reference are ignored.
    """
    breakdown: dict[str, dict[str, MonthlyBreakdown]] = {}
    if filtered.empty:
        return breakdown

    monthly = (
        score_transactions(filtered)
        .groupby(["customer_id", "year_month"], sort=True)
        .agg(points=("points", "sum"), amount_spent=("amount", _decimal_sum))
    )

    for (customer_id, year_month), row in monthly.iterrows():
        breakdown.setdefault(customer_id, {})[year_month] = MonthlyBreakdown(
            points=int(row["points"]),
            amount_spent=row["amount_spent"],
        )
    return breakdown


def summarize(customers: Iterable[Customer], filtered: pd.DataFrame) -> list[CustomerSummary]:
    """Build one summary per customer from windowed transactions.

    Totals are the sums of the monthly entries, so the monthly points always
    add up to ``total_points`` exactly.

    Args:
        customers: Customers in the order they should be reported.
        filtered: Output of ``window.filter_recent``.

    Returns:
        Summaries in customer order. Customers without windowed transactions
        get zero totals and an empty ``monthly_points``.
    """
    breakdown = monthly_breakdown(filtered)

    summaries = []
    for customer in customers:
        months = breakdown.get(customer.id, {})
        summaries.append(
            CustomerSummary(
                customer_id=customer.id,
                name=customer.name,
                total_points=sum(entry.points for entry in months.values()),
                total_amount_spent=sum((entry.amount_spent for entry in months.values()), Decimal(0)),
                monthly_points=dict(months),
            )
        )

    logger.debug("Summarized %d customer(s) from %d windowed transaction(s)", len(summaries), len(filtered))
    return summaries


def build_detail(customer: Customer, filtered: pd.DataFrame, customer_ref: str | None = None) -> CustomerDetail:
    """List a customer's windowed transactions with their points.

    Args:
        customer: The customer being reported.
        filtered: Output of ``window.filter_recent``.
        customer_ref: Canonical id to match transactions on. Defaults to
            ``customer.id``.

    Returns:
        CustomerDetail with transactions in ledger order.
    """
    ref = customer.id if customer_ref is None else customer_ref
    rows = filtered.loc[filtered["customer_id"] == ref]

    lines = [
        TransactionPoints(
            transaction_id=row.id,
            amount=row.amount,
            timestamp=row.timestamp,
            points=calculate_points(row.amount),
        )
        for row in rows.itertuples(index=False)
    ]
    return CustomerDetail(customer_id=customer.id, customer_name=customer.name, transactions=lines)


def enrich_all(
    customers: Iterable[Customer],
    transactions: Iterable[Transaction],
) -> list[EnrichedTransaction]:
    """Attach points and the resolved customer to every transaction.

    No time window is applied and no transaction is left out. Orphaned
    transactions get ``customer=None`` and transactions with no usable amount
    get ``points=0``. When two customers share an id, the later one wins.
    """
    lookup = {customer.id: customer for customer in customers}
    return [
        EnrichedTransaction(
            transaction=txn,
            points=calculate_points(txn.amount) if txn.amount is not None else 0,
            customer=lookup.get(txn.customer_id) if txn.customer_id is not None else None,
        )
        for txn in transactions
    ]


def summaries_to_frame(summaries: Sequence[CustomerSummary]) -> pd.DataFrame:
    """Flatten summaries to one row per customer × month.

    Customers without windowed transactions contribute no rows.
    """
    rows = [
        {
            "customer_id": summary.customer_id,
            "name": summary.name,
            "year_month": year_month,
            "points": entry.points,
            "amount_spent": entry.amount_spent,
        }
        for summary in summaries
        for year_month, entry in summary.monthly_points.items()
    ]
    return pd.DataFrame(rows, columns=SUMMARY_FRAME_COLUMNS)
