"""Example: Customer reward points report

This example demonstrates the three read operations of the rewards API
against the sample ledger in examples/data/transactions.json:
1. Points summary per customer and month (windowed)
2. One customer's transaction history (windowed)
3. Every transaction with points and resolved customer (unwindowed)

The sample ledger has fixed dates, so a long window is used here.
"""

from pathlib import Path

from rewards_core import CustomerNotFoundError, RewardsConfig, RewardsService
from rewards_core.formatters import (
    format_detail_for_console,
    format_points_for_console,
    format_transactions_for_console,
)

data_root = Path(__file__).parent / "data"
config = RewardsConfig.from_root(data_root, months_back=24)  # MODIFY AS NEEDED

service = RewardsService.from_config(config)

print(format_points_for_console(service.get_customer_points(), config.months_back))

print()
print(format_detail_for_console(service.get_customer_transactions("u1")))

# Numeric and string ids refer to the same customer
print()
print(format_detail_for_console(service.get_customer_transactions(3)))

print()
try:
    service.get_customer_transactions("missing-id")
except CustomerNotFoundError as e:
    print(f"Lookup failed as expected: {e}")

print()
print(format_transactions_for_console(service.get_all_transactions()))
