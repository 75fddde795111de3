from pathlib import Path

from conftest import empty_store, make_app


def _drop_from_document(app, collection: str, record_id: str) -> None:
    doc = app.repo.state.to_document()
    doc[collection] = [r for r in doc[collection] if r["id"] != record_id]
    app.repo.store.save(app.repo.key, doc)
    app.repo.load()


def test_transaction_history_is_newest_first(tmp_path: Path):
    app = make_app(tmp_path)
    store = empty_store(app)

    created = [
        app.transactions.add_transaction("PURCHASE", store.id, "p1", 5, 70000.0, vendor_id="v1"),
        app.transactions.add_transaction("SALE", store.id, "p1", 1, 75000.0),
        app.transactions.add_transaction("PURCHASE", store.id, "p3", 2, 15000.0, vendor_id="v2"),
    ]

    rows = app.transactions.get_transactions(store.id)
    assert [r.id for r in rows] == [t.id for t in reversed(created)]

    everything = app.transactions.get_transactions()
    assert [r.id for r in everything][:3] == [t.id for t in reversed(created)]
    assert [r.id for r in everything][-2:] == ["t2", "t1"]


def test_transaction_rows_join_names_and_mark_missing_vendor(tmp_path: Path):
    app = make_app(tmp_path)

    rows = {r.id: r for r in app.transactions.get_transactions("store_1")}

    assert rows["t1"].product_name == "Samsung Galaxy S24"
    assert rows["t1"].store_name == "Univercell Market"
    assert rows["t1"].vendor_name == "Global Mobiles Supply"
    assert rows["t2"].vendor_name == "—"
    assert rows["t2"].customer_type == "Retail"
    assert rows["t2"].total == 75000.0


def test_store_filter_only_returns_that_store(tmp_path: Path):
    app = make_app(tmp_path)
    app.transactions.add_transaction("PURCHASE", "store_2", "p3", 4, 15000.0, vendor_id="v2")

    assert {r.store_id for r in app.transactions.get_transactions("store_2")} == {"store_2"}
    assert {r.store_id for r in app.transactions.get_transactions("store_1")} == {"store_1"}


def test_store_inventory_joins_product_fields(tmp_path: Path):
    app = make_app(tmp_path)

    rows = {r.product_id: r for r in app.inventory.get_inventory("store_1")}

    assert set(rows) == {"p1", "p2"}
    assert rows["p1"].quantity == 10
    assert rows["p1"].brand == "Samsung"
    assert rows["p1"].specs == "8GB/256GB"
    assert rows["p1"].sales_price == 75000.0
    assert rows["p1"].store_name is None


def test_global_inventory_is_annotated_with_store_name(tmp_path: Path):
    app = make_app(tmp_path)

    rows = app.inventory.get_all_inventory()

    assert len(rows) == 4
    assert {(r.store_name, r.product_name) for r in rows} >= {
        ("Univercell Market", "Samsung Galaxy S24"),
        ("AZ Store", "Xiaomi Note 13"),
    }


def test_lost_product_is_dropped_from_inventory_and_unknown_in_history(tmp_path: Path):
    app = make_app(tmp_path)

    _drop_from_document(app, "products", "p1")

    assert all(r.product_id != "p1" for r in app.inventory.get_all_inventory())
    assert all(r.product_id != "p1" for r in app.inventory.get_inventory("store_1"))
    rows = {r.id: r for r in app.transactions.get_transactions()}
    assert rows["t1"].product_name == "Unknown"
    assert rows["t2"].product_name == "Unknown"


def test_lost_store_degrades_to_unknown(tmp_path: Path):
    app = make_app(tmp_path)

    _drop_from_document(app, "stores", "store_2")

    names = {(r.store_id, r.store_name) for r in app.inventory.get_all_inventory()}
    assert ("store_2", "Unknown") in names
    app.transactions.get_transactions()


def test_lost_vendor_shows_placeholder(tmp_path: Path):
    app = make_app(tmp_path)

    _drop_from_document(app, "vendors", "v1")

    rows = {r.id: r for r in app.transactions.get_transactions()}
    assert rows["t1"].vendor_name == "—"
