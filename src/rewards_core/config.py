"""Unified configuration for the rewards core.

This module provides a single, simple configuration class used by the
query service, the HTTP adapter, and the CLI.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from rewards_core.exceptions import ConfigError

DEFAULT_MONTHS_BACK = 3
DEFAULT_DATA_FILENAME = "transactions.json"

DATA_FILE_ENV = "REWARDS_DATA_FILE"
MONTHS_BACK_ENV = "REWARDS_MONTHS_BACK"


@dataclass
class RewardsConfig:
    """Location of the transaction ledger and the default lookback window.

    Attributes:
        data_file: Path to the JSON ledger holding ``customers`` and
            ``transactions``.
        months_back: Default lookback window in months for windowed queries.

    Directory Structure:
        data_root/
        └── transactions.json   # {"customers": [...], "transactions": [...]}
    """

    data_file: Path
    months_back: int = DEFAULT_MONTHS_BACK

    def __post_init__(self) -> None:
        if isinstance(self.data_file, str):
            self.data_file = Path(self.data_file)
        if isinstance(self.months_back, bool) or not isinstance(self.months_back, int):
            raise ConfigError(f"months_back must be an integer, got {self.months_back!r}")
        if self.months_back < 0:
            raise ConfigError(f"months_back must be >= 0, got {self.months_back}")

    @classmethod
    def from_root(
        cls,
        data_root: str | Path,
        months_back: int = DEFAULT_MONTHS_BACK,
    ) -> RewardsConfig:
        """Create a RewardsConfig from a data directory.

        Args:
            data_root: Directory containing ``transactions.json``.
            months_back: Default lookback window in months.

        Returns:
            RewardsConfig instance.

        Examples:
            >>> config = RewardsConfig.from_root("data")
            >>> config.data_file
            PosixPath('data/transactions.json')
        """
        if isinstance(data_root, str):
            data_root = Path(data_root)

        return cls(data_file=data_root / DEFAULT_DATA_FILENAME, months_back=months_back)

    @classmethod
    def from_env(cls, default_root: str | Path = "data") -> RewardsConfig:
        """Create a RewardsConfig from ``REWARDS_DATA_FILE`` / ``REWARDS_MONTHS_BACK``.

        Falls back to ``<default_root>/transactions.json`` and a 3 month window
        when the variables are unset.

        Raises:
            ConfigError: If ``REWARDS_MONTHS_BACK`` is not a non-negative integer.
        """
        raw_months = os.environ.get(MONTHS_BACK_ENV)
        months_back = DEFAULT_MONTHS_BACK
        if raw_months:
            try:
                months_back = int(raw_months)
            except ValueError as e:
                raise ConfigError(f"{MONTHS_BACK_ENV} must be an integer, got {raw_months!r}") from e

        data_file = os.environ.get(DATA_FILE_ENV)
        if data_file:
            return cls(data_file=Path(data_file), months_back=months_back)
        return cls.from_root(default_root, months_back=months_back)
