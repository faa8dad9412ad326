"""End-to-end tests for the RewardsService query façade."""

from decimal import Decimal

import pytest

from rewards_core import RewardsConfig, RewardsService
from rewards_core.exceptions import CustomerNotFoundError, DataUnavailableError, MalformedDataError
from tests.test_utils import fixed_clock, ledger, make_service, txn

SCENARIO = ledger(
    customers=[{"id": "u1", "name": "Ada"}, {"id": "u2", "name": "Bob"}],
    transactions=[
        txn("t1", "u1", 120, "2025-09-03T12:00:00Z"),
        txn("t2", "u1", 45, "2025-08-10T12:00:00Z"),
        txn("t3", "u2", 51, "2025-09-07T12:00:00Z"),
    ],
)


def test_customer_points_scenario() -> None:
    service, _ = make_service(SCENARIO)

    u1, u2 = service.get_customer_points()

    assert u1.total_points == 90
    assert u1.total_amount_spent == Decimal("165.0")
    assert u1.monthly_points["2025-09"].points == 90
    assert u1.monthly_points["2025-08"].points == 0
    assert u1.monthly_points["2025-08"].amount_spent == Decimal(45)
    assert u2.total_points == 1


def test_customer_points_empty_ledger() -> None:
    service, _ = make_service(ledger())
    assert service.get_customer_points() == []


def test_customer_points_window_override() -> None:
    payload = ledger(
        customers=[{"id": "u1", "name": "Ada"}],
        transactions=[txn("t1", "u1", 120, "2025-01-20T00:00:00Z"), txn("t2", "u1", 60, "2025-09-01")],
    )
    service, _ = make_service(payload)

    assert service.get_customer_points()[0].total_points == 10
    assert service.get_customer_points(months_back=12)[0].total_points == 100


def test_service_default_window_comes_from_constructor() -> None:
    payload = ledger(customers=[{"id": "u1", "name": "Ada"}], transactions=[txn("t1", "u1", 120, "2025-01-20")])

    service, _ = make_service(payload, months_back=12)

    assert service.get_customer_points()[0].total_points == 90


def test_numeric_ids_join_with_string_references() -> None:
    payload = ledger(
        customers=[{"id": 7, "name": "Num"}],
        transactions=[txn("t1", "7", 120, "2025-09-01"), txn("t2", 7, 60, "2025-09-02")],
    )
    service, _ = make_service(payload)

    (summary,) = service.get_customer_points()
    assert summary.customer_id == "7"
    assert summary.total_points == 100

    detail = service.get_customer_transactions("7")
    assert [t.transaction_id for t in detail.transactions] == ["t1", "t2"]


def test_customer_transactions_detail() -> None:
    service, _ = make_service(SCENARIO)

    detail = service.get_customer_transactions("u1")

    assert detail.customer_id == "u1"
    assert detail.customer_name == "Ada"
    assert [(t.transaction_id, t.points) for t in detail.transactions] == [("t1", 90), ("t2", 0)]


def test_customer_transactions_windowed_but_customer_exists() -> None:
    payload = ledger(customers=[{"id": "u1", "name": "Ada"}], transactions=[txn("t1", "u1", 120, "2024-01-01")])
    service, _ = make_service(payload)

    detail = service.get_customer_transactions("u1")

    assert detail.transactions == []


def test_customer_transactions_not_found() -> None:
    service, _ = make_service(SCENARIO)

    with pytest.raises(CustomerNotFoundError, match="missing-id") as exc_info:
        service.get_customer_transactions("missing-id")
    assert exc_info.value.customer_id == "missing-id"


def test_customer_without_stored_id_cannot_be_looked_up() -> None:
    service, _ = make_service(ledger(customers=[{"name": "Anon"}]))

    synthesized = service.get_customer_points()[0].customer_id
    with pytest.raises(CustomerNotFoundError):
        service.get_customer_transactions(synthesized)
    with pytest.raises(CustomerNotFoundError):
        service.get_customer_transactions("None")


def test_all_transactions_unwindowed() -> None:
    payload = ledger(
        customers=[{"id": "u1", "name": "Ada"}],
        transactions=[txn("t1", "u1", 120, "2020-01-01"), txn("t2", "nobody", 60, "bad-date")],
    )
    service, _ = make_service(payload)

    t1, t2 = service.get_all_transactions()

    assert t1.points == 90
    assert t1.customer.name == "Ada"
    assert t2.points == 10
    assert t2.customer is None


def test_all_transactions_pass_stored_records_through() -> None:
    payload = ledger(
        customers=[{"id": 7, "name": "Num", "tier": "gold"}, {"id": "u1", "name": "Ada"}],
        transactions=[
            {"id": "t1", "customerId": 7, "amount": 120, "timestamp": "2025-09-01"},
            txn("t2", "u1", "n/a", "2025-09-02"),
        ],
    )
    service, _ = make_service(payload)

    out = [item.to_dict() for item in service.get_all_transactions()]

    assert len(out) == 2
    assert out[0] == {
        "id": "t1",
        "customerId": 7,
        "amount": 120,
        "timestamp": "2025-09-01",
        "points": 90,
        "customer": {"id": 7, "name": "Num", "tier": "gold"},
    }
    assert out[1] == {
        "id": "t2",
        "userId": "u1",
        "amount": "n/a",
        "date": "2025-09-02",
        "points": 0,
        "customer": {"id": "u1", "name": "Ada"},
    }


def test_unusable_amounts_earn_nothing_in_windowed_queries() -> None:
    payload = ledger(
        customers=[{"id": "u1", "name": "Ada"}],
        transactions=[txn("t1", "u1", 120, "2025-09-01"), txn("t2", "u1", "n/a", "2025-09-02")],
    )
    service, _ = make_service(payload)

    (summary,) = service.get_customer_points()
    detail = service.get_customer_transactions("u1")

    assert summary.total_points == 90
    assert summary.total_amount_spent == Decimal(120)
    assert [t.transaction_id for t in detail.transactions] == ["t1"]


def test_all_transactions_keep_synthesized_ids_between_calls() -> None:
    service, _ = make_service(ledger(transactions=[{"userId": "u1", "amount": 60, "date": "2025-09-01"}]))

    first = service.get_all_transactions()[0].transaction.id
    second = service.get_all_transactions()[0].transaction.id

    assert first == second


def test_repeated_queries_use_cached_ledger() -> None:
    service, store = make_service(SCENARIO)

    first = [s.to_dict() for s in service.get_customer_points()]
    second = [s.to_dict() for s in service.get_customer_points()]

    assert first == second
    assert store.reads == 1

    store.update(ledger(customers=[{"id": "u3", "name": "Cy"}]))
    assert [s.customer_id for s in service.get_customer_points()] == ["u3"]
    assert store.reads == 2


def test_data_source_errors_propagate() -> None:
    service, store = make_service("{}")
    with pytest.raises(MalformedDataError):
        service.get_customer_points()
    with pytest.raises(MalformedDataError):
        service.get_customer_transactions("u1")
    with pytest.raises(MalformedDataError):
        service.get_all_transactions()


def test_from_config_missing_file(tmp_path) -> None:
    service = RewardsService.from_config(RewardsConfig.from_root(tmp_path), clock=fixed_clock)
    with pytest.raises(DataUnavailableError):
        service.get_customer_points()
