"""Output formatters for reward query results."""

from rewards_core.formatters.console import (
    format_detail_for_console,
    format_points_for_console,
    format_transactions_for_console,
)

__all__ = [
    "format_detail_for_console",
    "format_points_for_console",
    "format_transactions_for_console",
]
