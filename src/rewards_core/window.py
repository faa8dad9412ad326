"""Trailing time-window filter for ledger transactions.

Transactions are handled as a pandas DataFrame with one row per transaction
(``id``, ``customer_id``, ``amount``, ``timestamp``). ``filter_recent`` keeps
the rows inside the lookback window and adds:

- ``occurred_at``: the parsed instant (UTC ``pd.Timestamp``)
- ``year_month``: its UTC calendar bucket, ``YYYY-MM``

Rows whose date does not parse are dropped without raising; one bad record
must not fail the whole query.

Examples:
    >>> from datetime import datetime, timezone
    >>> now = datetime(2025, 9, 15, 12, tzinfo=timezone.utc)
    >>> months_ago(3, now)
    Timestamp('2025-06-15 00:00:00+0000', tz='UTC')
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from typing import Any

import pandas as pd

from rewards_core.config import DEFAULT_MONTHS_BACK
from rewards_core.types import Transaction

logger = logging.getLogger(__name__)

TRANSACTION_COLUMNS = ["id", "customer_id", "amount", "timestamp"]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def months_ago(months: int, now: datetime | None = None) -> pd.Timestamp:
    """Return UTC midnight of today's day-of-month, ``months`` calendar months back.

    Month underflow rolls into prior years. A day that does not exist in the
    target month rolls forward into the following month (31 March minus one
    month is 3 March, or 2 March in leap years).

    Args:
        months: Number of months to go back (>= 0).
        now: Reference time. Defaults to the current UTC time; naive values
            are taken to be UTC.

    Returns:
        Cutoff instant as a UTC Timestamp.

    Raises:
        ValueError: If months is negative.

    Examples:
        >>> months_ago(3, datetime(2025, 1, 15, tzinfo=timezone.utc))
        Timestamp('2024-10-15 00:00:00+0000', tz='UTC')
    """
    if months < 0:
        raise ValueError(f"months must be >= 0, got {months}")

    now = now or utc_now()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    else:
        now = now.astimezone(timezone.utc)

    year, month_index = divmod(now.year * 12 + (now.month - 1) - months, 12)
    first_of_month = datetime(year, month_index + 1, 1, tzinfo=timezone.utc)
    return pd.Timestamp(first_of_month + timedelta(days=now.day - 1))


def format_year_month(ts: datetime | pd.Timestamp) -> str:
    """Format an instant as its UTC ``YYYY-MM`` bucket.

    Examples:
        >>> format_year_month(pd.Timestamp("2025-09-30T23:00:00-03:00"))
        '2025-10'
    """
    ts = pd.Timestamp(ts)
    ts = ts.tz_localize("UTC") if ts.tzinfo is None else ts.tz_convert("UTC")
    return f"{ts.year:04d}-{ts.month:02d}"


def transactions_to_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Build the transaction DataFrame, preserving input order."""
    rows = [
        {
            "id": txn.id,
            "customer_id": txn.customer_id,
            "amount": txn.amount,
            "timestamp": txn.timestamp,
        }
        for txn in transactions
    ]
    return pd.DataFrame(rows, columns=TRANSACTION_COLUMNS)


def parse_timestamps(values: pd.Series) -> pd.Series:
    """Parse stored date values to UTC Timestamps, NaT where they are invalid.

    Only ISO 8601 strings (and datetime objects) are accepted; date-only and
    offset-less values are read as UTC.
    """
    text = values.map(_timestamp_text).astype(object)
    return pd.to_datetime(text, utc=True, errors="coerce", format="ISO8601")


def _timestamp_text(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        return value.isoformat()
    return None


def filter_recent(
    transactions: pd.DataFrame | Iterable[Transaction],
    months_back: int = DEFAULT_MONTHS_BACK,
    now: datetime | None = None,
) -> pd.DataFrame:
    """Keep transactions dated at or after the lookback cutoff.

    Dates must be ISO 8601 strings (``2025-09-10``, ``2025-09-10T14:30:00Z``,
    ``2025-09-10T14:30:00-03:00``) or datetime objects; date-only and
    offset-less values are read as UTC. Anything else, such as
    ``Sep 10, 2025`` or an epoch number, is treated as an invalid date and
    the row is dropped. Rows with no usable amount
    (``amount`` is None) are dropped as well.

    Args:
        transactions: Transaction DataFrame (see ``transactions_to_frame``) or
            Transaction records.
        months_back: Lookback window in months (default: 3).
        now: Reference time for the cutoff. Defaults to the current UTC time.

    Returns:
        The retained rows, in input order, with ``occurred_at`` and
        ``year_month`` columns added. The cutoff instant itself is retained.
    """
    if isinstance(transactions, pd.DataFrame):
        frame = transactions
    else:
        frame = transactions_to_frame(transactions)

    cutoff = months_ago(months_back, now)
    occurred_at = parse_timestamps(frame["timestamp"])

    valid = occurred_at.notna()
    invalid_count = int((~valid).sum())
    if invalid_count:
        logger.info("Dropping %d transaction(s) with dates that are not ISO 8601", invalid_count)

    scorable = frame["amount"].notna()

    keep = valid & scorable & (occurred_at >= cutoff)

    result = frame.loc[keep].copy()
    result["occurred_at"] = occurred_at.loc[keep]
    result["year_month"] = [format_year_month(ts) for ts in result["occurred_at"]]
    result = result.reset_index(drop=True)

    logger.debug(
        "Window %d month(s) from %s: kept %d of %d transaction(s)",
        months_back,
        cutoff.isoformat(),
        len(result),
        len(frame),
    )
    return result
