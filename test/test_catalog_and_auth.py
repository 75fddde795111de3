from pathlib import Path

import pytest

from conftest import make_app

from posledger.domain.errors import AuthorizationError, ValidationError
from posledger.domain.models import User
from posledger.services.auth_service import AuthService


def test_add_store_creates_linked_store_user(tmp_path: Path):
    app = make_app(tmp_path)

    account = app.catalog.add_store({"name": "X"}, {"username": "x1", "password": "p"})

    assert account.store.name == "X"
    assert account.store in app.catalog.list_stores()
    assert account.user.store_id == account.store.id
    assert account.user.role == "store_user"
    assert account.user.name == "X Manager"
    users = [u for u in app.catalog.list_users() if u.username == "x1"]
    assert len(users) == 1 and users[0].role == "store_user"


def test_add_store_with_taken_username_persists_neither_half(tmp_path: Path):
    app = make_app(tmp_path)
    stores_before = app.catalog.list_stores()
    users_before = app.catalog.list_users()

    with pytest.raises(ValidationError, match="already taken"):
        app.catalog.add_store({"name": "Dup", "location": "Here"}, {"username": "azstore", "password": "p"})

    assert app.catalog.list_stores() == stores_before
    assert app.catalog.list_users() == users_before

    # the durable copy agrees with memory
    app.repo.load()
    assert [s.id for s in app.catalog.list_stores()] == [s.id for s in stores_before]


def test_add_product_and_vendor_are_appended_with_fresh_ids(tmp_path: Path):
    app = make_app(tmp_path)

    product = app.catalog.add_product("Google", "Pixel 8", "8GB/128GB", 50000, 56000)
    vendor = app.catalog.add_vendor("Pixel Distributors", "555-0199", "GST55555", "9 Cloud Rd")

    assert app.catalog.list_products()[-1] == product
    assert app.catalog.list_vendors()[-1] == vendor
    assert product.id.startswith("p") and product.id not in {"p1", "p2", "p3"}
    assert vendor.id.startswith("v")
    assert product.display_name == "Google Pixel 8"


@pytest.mark.parametrize(
    "args",
    [
        ("", "Model", "", 1, 1),
        ("Brand", " ", "", 1, 1),
        ("Brand", "Model", "", -1, 1),
        ("Brand", "Model", "", 1, -1),
    ],
)
def test_add_product_validation(tmp_path: Path, args):
    app = make_app(tmp_path)

    with pytest.raises(ValidationError):
        app.catalog.add_product(*args)

    assert len(app.catalog.list_products()) == 3


def test_login_returns_user_or_none(tmp_path: Path):
    app = make_app(tmp_path)

    assert app.auth.login("admin", "wrong") is None
    assert app.auth.login("ghost", "123") is None
    assert app.auth.current_user() is None

    user = app.auth.login("univercell", "123")
    assert user is not None and user.store_id == "store_1"
    assert app.auth.current_user() == user


def test_session_survives_restart_and_logout_clears_it(tmp_path: Path):
    app = make_app(tmp_path)
    app.auth.login("admin", "123")
    token = app.auth.session_token()

    restarted = make_app(tmp_path)
    assert restarted.auth.current_user().username == "admin"
    assert restarted.auth.validate_token(token).username == "admin"

    restarted.auth.logout()
    assert restarted.auth.current_user() is None
    with pytest.raises(AuthorizationError):
        restarted.auth.validate_token(token)


def test_validate_token_rejects_stale_token(tmp_path: Path):
    app = make_app(tmp_path)
    app.auth.login("admin", "123")
    old = app.auth.session_token()
    app.auth.login("azstore", "123")

    with pytest.raises(AuthorizationError, match="Invalid or expired session"):
        app.auth.validate_token(old)
    assert app.auth.validate_token(app.auth.session_token()).username == "azstore"


def test_permission_matrix():
    auth = AuthService(repo=None)
    admin = User(id="a", username="admin", role="admin")
    clerk = User(id="u", username="clerk", role="store_user", store_id="store_1")

    assert auth.can(admin, "add_store") is True
    assert auth.can(clerk, "add_store") is False
    assert auth.can(clerk, "record_sale", "store_1") is True
    assert auth.can(clerk, "record_sale", "store_2") is False
    assert auth.can(admin, "record_sale", "store_2") is True
    assert auth.can(clerk, "view_all_stores") is False
    assert auth.can(admin, "no_such_action") is False


def test_store_user_is_confined_to_own_store(tmp_path: Path):
    app = make_app(tmp_path)
    clerk = app.auth.login("univercell", "123")

    app.transactions.record_sale("store_1", "p1", 1, 75000.0, customer_type="Retail", actor=clerk)

    with pytest.raises(AuthorizationError, match="no access to store"):
        app.transactions.record_sale("store_2", "p1", 1, 75000.0, actor=clerk)
    with pytest.raises(AuthorizationError):
        app.cash.add_entry("store_2", "DEBIT", 10, "x", actor=clerk)
    with pytest.raises(AuthorizationError):
        app.inventory.get_inventory("store_2", actor=clerk)
    with pytest.raises(AuthorizationError):
        app.transactions.get_transactions(actor=clerk)
    with pytest.raises(AuthorizationError, match="not allowed"):
        app.catalog.add_product("A", "B", "", 1, 1, actor=clerk)
    with pytest.raises(AuthorizationError):
        app.operations.reset(actor=clerk)

    assert len(app.inventory.get_inventory("store_1", actor=clerk)) == 2


def test_admin_can_act_on_any_store(tmp_path: Path):
    app = make_app(tmp_path)
    admin = app.auth.login("admin", "123")

    account = app.catalog.add_store({"name": "Mall Kiosk", "location": "Mall"}, {"username": "kiosk", "password": "k"}, actor=admin)
    tx = app.transactions.record_purchase(account.store.id, "p3", 3, 15000.0, vendor_id="v2", actor=admin)

    assert tx.status == "Approved"
    assert app.inventory.stock_for(account.store.id, "p3") == 3
    assert len(app.transactions.get_transactions(actor=admin)) == 3
