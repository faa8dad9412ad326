"""Console output formatting utilities."""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from rewards_core.aggregate import summaries_to_frame
from rewards_core.types import CustomerDetail, CustomerSummary, EnrichedTransaction


def _money(value: Decimal) -> str:
    return f"${value:,.2f}"


def format_points_for_console(summaries: Sequence[CustomerSummary], months_back: int) -> str:
    """Build a points table: one line per customer, one column per month.

    Args:
        summaries: Output of ``RewardsService.get_customer_points``.
        months_back: Window length, shown in the title.

    Returns:
        Human-readable text for console output.
    """
    if not summaries:
        return "No customers found."

    lines = []
    lines.append(f"Reward Points - Last {months_back} Months")
    lines.append("=" * 60)

    frame = summaries_to_frame(summaries)
    months = sorted(frame["year_month"].unique())

    header = f"{'Customer':<24}" + "".join(f"{m:>10}" for m in months) + f"{'Total':>10}{'Spent':>14}"
    lines.append(header)
    lines.append("-" * len(header))

    for summary in summaries:
        cells = []
        for month in months:
            entry = summary.monthly_points.get(month)
            points = entry.points if entry is not None else 0
            cells.append(f"{points:>10}")
        name = summary.name or summary.customer_id
        lines.append(
            f"{name[:23]:<24}"
            + "".join(cells)
            + f"{summary.total_points:>10}"
            + f"{_money(summary.total_amount_spent):>14}"
        )

    return "\n".join(lines)


def format_detail_for_console(detail: CustomerDetail) -> str:
    """Build a transaction listing for a single customer."""
    lines = []
    lines.append(f"{detail.customer_name} ({detail.customer_id})")
    lines.append("=" * 60)

    if not detail.transactions:
        lines.append("No transactions in window.")
        return "\n".join(lines)

    total = 0
    for txn in detail.transactions:
        lines.append(f"  {str(txn.timestamp):<26}{_money(txn.amount):>14}{txn.points:>8} pts")
        total += txn.points
    lines.append(f"  {'Total':<26}{'':>14}{total:>8} pts")
    return "\n".join(lines)


def format_transactions_for_console(transactions: Sequence[EnrichedTransaction]) -> str:
    """Build a listing of every transaction with its customer and points."""
    if not transactions:
        return "No transactions found."

    lines = []
    lines.append(f"All Transactions ({len(transactions)})")
    lines.append("=" * 60)
    for item in transactions:
        txn = item.transaction
        who = item.customer.name if item.customer is not None else "(unknown customer)"
        amount = _money(txn.amount) if txn.amount is not None else "n/a"
        lines.append(
            f"  {txn.id[:12]:<14}{who[:20]:<22}{str(txn.timestamp):<26}"
            f"{amount:>14}{item.points:>8}"
        )
    return "\n".join(lines)
