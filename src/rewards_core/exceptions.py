"""Domain-specific exceptions for the rewards core.

This module defines custom exceptions that are part of the public API.
All exceptions inherit from RewardsAPIError for easy catching.
"""

from __future__ import annotations


class RewardsAPIError(Exception):
    """Base exception for all rewards core errors.

    Users can catch this exception to handle any error raised by the
    package.
    """

    pass


class ConfigError(RewardsAPIError):
    """Raised when there is a configuration error.

    This exception is raised when:
    - Invalid configuration values are provided
    - Required configuration is missing
    """

    pass


class DataSourceError(RewardsAPIError):
    """Raised when the transaction ledger cannot be loaded.

    A data source failure fails the whole request; nothing is retried
    or partially served.
    """

    pass


class DataUnavailableError(DataSourceError):
    """Raised when the backing store is missing or unreadable.

    This exception is raised when:
    - The ledger file does not exist
    - The ledger file cannot be stat'ed or read (permissions, I/O errors)
    """

    pass


class MalformedDataError(DataSourceError):
    """Raised when the ledger payload has the wrong shape.

    This exception is raised when:
    - The payload is not valid JSON
    - The top-level value is not an object
    - The ``customers`` or ``transactions`` collection is missing or not a list
    """

    pass


class CustomerNotFoundError(RewardsAPIError):
    """Raised when a single-customer lookup finds no matching customer."""

    def __init__(self, customer_id: object) -> None:
        self.customer_id = customer_id
        super().__init__(f"Customer with ID {customer_id} not found")
