from pathlib import Path

import pytest

from conftest import empty_store, make_app

from posledger.domain.errors import NotFoundError, ValidationError


def test_credit_then_debit_balance(tmp_path: Path):
    app = make_app(tmp_path)
    store = empty_store(app)

    app.cash.add_entry(store.id, "CREDIT", 5000, "Weekly allowance", by="admin")
    app.cash.add_entry(store.id, "DEBIT", 200, "Tea & Snacks", by="empty1")

    assert app.cash.balance(store.id) == 4800


def test_seed_balance_and_global_balance(tmp_path: Path):
    app = make_app(tmp_path)
    app.cash.add_entry("store_2", "CREDIT", 1000, "Float")

    assert app.cash.balance("store_1") == 4800
    assert app.cash.balance("store_2") == 1000
    assert app.cash.balance() == 5800


def test_balance_ignores_display_slicing(tmp_path: Path):
    app = make_app(tmp_path)
    for i in range(6):
        app.cash.add_entry("store_1", "DEBIT", 100, f"expense {i}")

    shown = app.cash.get_entries("store_1")[:3]

    assert sum(r.amount for r in shown) == 300
    assert app.cash.balance("store_1") == 4800 - 600


def test_cash_log_is_newest_first_with_store_name(tmp_path: Path):
    app = make_app(tmp_path)

    entry = app.cash.add_entry("store_1", "debit", 50, "Courier")
    rows = app.cash.get_entries("store_1")

    assert [r.id for r in rows] == [entry.id, "pc2", "pc1"]
    assert rows[0].kind == "DEBIT"
    assert rows[0].store_name == "Univercell Market"
    assert entry.id.startswith("pc")
    assert app.cash.get_entries("store_2") == []


def test_actor_username_is_recorded_when_by_is_omitted(tmp_path: Path):
    app = make_app(tmp_path)
    user = app.auth.login("univercell", "123")

    entry = app.cash.add_entry("store_1", "DEBIT", 20, "Stationery", actor=user)

    assert entry.by == "univercell"


@pytest.mark.parametrize(
    "kind, amount, store_id, error",
    [
        ("CREDIT", 0, "store_1", ValidationError),
        ("DEBIT", -5, "store_1", ValidationError),
        ("CREDIT", float("nan"), "store_1", ValidationError),
        ("DEBIT", float("inf"), "store_1", ValidationError),
        ("REFUND", 5, "store_1", ValidationError),
        ("CREDIT", 5, "store_404", NotFoundError),
    ],
)
def test_add_entry_rejects_bad_input(tmp_path: Path, kind, amount, store_id, error):
    app = make_app(tmp_path)

    with pytest.raises(error):
        app.cash.add_entry(store_id, kind, amount, "x")

    assert len(app.cash.get_entries()) == 2
