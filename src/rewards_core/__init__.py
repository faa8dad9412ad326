"""Rewards Core - customer loyalty points from a purchase ledger.

This package computes reward points per customer and per calendar month
over a trailing window of purchase transactions:

- **Ledger**: cached, validated customers/transactions snapshot
- **Window**: lookback cutoff and ``YYYY-MM`` month buckets
- **Points**: tiered points policy
- **Aggregation**: per-customer totals and monthly breakdowns

Module Structure:
    rewards_core.api: RewardsService query façade
    rewards_core.ledger: LedgerSource cache and JsonFileStore
    rewards_core.window: filter_recent, months_ago
    rewards_core.points: calculate_points
    rewards_core.aggregate: summarize, build_detail, enrich_all
    rewards_core.identity: canonical_id, ensure_id
    rewards_core.server: FastAPI adapter
    rewards_core.config: RewardsConfig

Quick Start:
    >>> from rewards_core import RewardsConfig, RewardsService
    >>>
    >>> config = RewardsConfig.from_root("data")
    >>> service = RewardsService.from_config(config)
    >>>
    >>> for summary in service.get_customer_points():
    ...     print(summary.name, summary.total_points)
"""

__version__ = "0.1.0"

from rewards_core.api import RewardsService
from rewards_core.config import RewardsConfig
from rewards_core.exceptions import (
    ConfigError,
    CustomerNotFoundError,
    DataSourceError,
    DataUnavailableError,
    MalformedDataError,
    RewardsAPIError,
)
from rewards_core.points import calculate_points

__all__ = [
    "ConfigError",
    "CustomerNotFoundError",
    "DataSourceError",
    "DataUnavailableError",
    "MalformedDataError",
    "RewardsAPIError",
    "RewardsConfig",
    "RewardsService",
    "__version__",
    "calculate_points",
]
