"""Ledger access: the cached, validated customers/transactions snapshot.

Example:
    >>> from rewards_core.ledger import JsonFileStore, LedgerSource
    >>>
    >>> source = LedgerSource(JsonFileStore("data/transactions.json"))
    >>> dataset = source.load()  # re-read only when the file changes
"""

from rewards_core.ledger.source import (
    JsonFileStore,
    LedgerSource,
    LedgerStore,
    parse_amount,
    parse_ledger,
)

__all__ = ["JsonFileStore", "LedgerSource", "LedgerStore", "parse_amount", "parse_ledger"]
