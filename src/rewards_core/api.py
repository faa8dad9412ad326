"""Public API for reward points queries.

This module provides the three read operations on top of the cached ledger:

- ``get_customer_points``: windowed points summary for every customer
- ``get_customer_transactions``: one customer's windowed transaction history
- ``get_all_transactions``: every transaction with points, no window

Example:
    >>> from rewards_core import RewardsConfig, RewardsService
    >>>
    >>> service = RewardsService.from_config(RewardsConfig.from_root("data"))
    >>> summaries = service.get_customer_points()          # last 3 months
    >>> detail = service.get_customer_transactions("u1", months_back=6)
    >>> everything = service.get_all_transactions()
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from rewards_core.aggregate import build_detail, enrich_all, summarize
from rewards_core.config import DEFAULT_MONTHS_BACK, RewardsConfig
from rewards_core.exceptions import CustomerNotFoundError
from rewards_core.identity import canonical_id
from rewards_core.ledger.source import JsonFileStore, LedgerSource
from rewards_core.types import CustomerDetail, CustomerSummary, EnrichedTransaction
from rewards_core.window import filter_recent, utc_now

logger = logging.getLogger(__name__)


class RewardsService:
    """Query façade over a cached ledger source.

    Each call loads the ledger through the source (a cheap stat when nothing
    changed), applies the lookback window, and builds fresh results. No
    aggregate state is kept between calls.

    Args:
        source: Cached ledger accessor.
        clock: Returns the reference time for lookback windows.
        months_back: Default lookback window in months.
    """

    def __init__(
        self,
        source: LedgerSource,
        clock: Callable[[], datetime] = utc_now,
        months_back: int = DEFAULT_MONTHS_BACK,
    ) -> None:
        self.source = source
        self.clock = clock
        self.months_back = months_back

    @classmethod
    def from_config(cls, config: RewardsConfig, clock: Callable[[], datetime] = utc_now) -> RewardsService:
        """Build a service reading the JSON ledger named by ``config``."""
        return cls(LedgerSource(JsonFileStore(config.data_file)), clock=clock, months_back=config.months_back)

    def _window(self, months_back: int | None) -> int:
        return self.months_back if months_back is None else months_back

    def get_customer_points(self, months_back: int | None = None) -> list[CustomerSummary]:
        """Return the windowed points summary of every customer, in ledger order.

        Args:
            months_back: Lookback window in months. Defaults to the service default.

        Raises:
            DataUnavailableError: If the ledger cannot be read.
            MalformedDataError: If the ledger is invalid.
        """
        dataset = self.source.load()
        filtered = filter_recent(dataset.transactions, self._window(months_back), now=self.clock())
        return summarize(dataset.customers, filtered)

    def get_customer_transactions(self, customer_id: object, months_back: int | None = None) -> CustomerDetail:
        """Return one customer's windowed transactions with points.

        The customer is looked up on its stored id, compared in canonical
        string form, so ``7`` and ``"7"`` refer to the same customer.

        Args:
            customer_id: Requested customer id.
            months_back: Lookback window in months. Defaults to the service default.

        Raises:
            CustomerNotFoundError: If no customer has a matching stored id.
            DataUnavailableError: If the ledger cannot be read.
            MalformedDataError: If the ledger is invalid.
        """
        dataset = self.source.load()

        requested = canonical_id(customer_id)
        customer = None
        if requested is not None:
            customer = next(
                (c for c in dataset.customers if canonical_id(c.source_id) == requested),
                None,
            )
        if customer is None:
            logger.info("Customer %r not found", customer_id)
            raise CustomerNotFoundError(customer_id)

        filtered = filter_recent(dataset.transactions, self._window(months_back), now=self.clock())
        return build_detail(customer, filtered, customer_ref=requested)

    def get_all_transactions(self) -> list[EnrichedTransaction]:
        """Return every ledger transaction with points and resolved customer.

        Raises:
            DataUnavailableError: If the ledger cannot be read.
            MalformedDataError: If the ledger is invalid.
        """
        dataset = self.source.load()
        return enrich_all(dataset.customers, dataset.transactions)
