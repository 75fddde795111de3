from __future__ import annotations

import secrets
import threading
from datetime import date
from typing import Iterable, Optional

from posledger.domain.errors import ValidationError
from posledger.domain.models import (
    NO_VENDOR,
    ROLE_STORE_USER,
    SALE,
    UNKNOWN,
    CashEntry,
    CashRow,
    InventoryRecord,
    InventoryRow,
    Product,
    Store,
    StoreAccount,
    Transaction,
    TransactionRow,
    User,
    Vendor,
)
from posledger.repositories.document_store import DocumentStore, SqliteDocumentStore
from posledger.repositories.seed import seed_document
from posledger.repositories.state import LedgerState
from posledger.repositories.unit_of_work import RepositoryUnitOfWork

LEDGER_KEY = "ledger"


def _today_iso() -> str:
    return date.today().isoformat()


def _new_id(prefix: str, taken: Iterable[str]) -> str:
    taken = set(taken)
    while True:
        candidate = f"{prefix}{secrets.token_hex(6)}"
        if candidate not in taken:
            return candidate


class LedgerRepository:
    """The ledger store: catalog, stock, transaction and cash logs.

    Every write runs inside a unit of work (see ``unit_of_work``) and is
    persisted before the call returns. Reads take the same lock, copy what
    they need and release it before building rows. Reads never raise on missing
    references: lookups return ``None`` and joins degrade to "Unknown" or
    drop the row.
    """

    def __init__(self, store: DocumentStore | None = None, *, db_path=None, key: str = LEDGER_KEY):
        if store is None:
            if db_path is None:
                raise ValueError("LedgerRepository needs a document store or a db_path")
            store = SqliteDocumentStore(db_path)
        self.store = store
        self.key = key
        self.lock = threading.RLock()
        self.state = LedgerState()
        self._depth = 0

    def init_db(self) -> None:
        init = getattr(self.store, "init_db", None)
        if init is not None:
            init()
        self.load()

    def load(self) -> None:
        with self.lock:
            doc = self.store.load(self.key)
            if doc is None:
                self.state = LedgerState.from_document(seed_document())
                self.save()
            else:
                self.state = LedgerState.from_document(doc)

    def save(self) -> None:
        self.store.save(self.key, self.state.to_document())

    def unit_of_work(self) -> RepositoryUnitOfWork:
        return RepositoryUnitOfWork(self)

    def reset(self) -> None:
        with self.unit_of_work():
            self.state.restore(LedgerState.from_document(seed_document()))

    # ---------- Session ----------
    def get_session(self) -> Optional[dict]:
        with self.lock:
            return dict(self.state.current_session) if self.state.current_session else None

    def set_session(self, session: Optional[dict]) -> None:
        with self.unit_of_work():
            self.state.current_session = dict(session) if session else None

    # ---------- Catalog reads ----------
    def list_stores(self) -> list[Store]:
        with self.lock:
            return list(self.state.stores.values())

    def get_store(self, store_id: str) -> Optional[Store]:
        with self.lock:
            return self.state.stores.get(store_id)

    def list_users(self) -> list[User]:
        with self.lock:
            return list(self.state.users.values())

    def get_user(self, user_id: str) -> Optional[User]:
        with self.lock:
            return self.state.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self.lock:
            for u in self.state.users.values():
                if u.username == username:
                    return u
        return None

    def list_vendors(self) -> list[Vendor]:
        with self.lock:
            return list(self.state.vendors.values())

    def get_vendor(self, vendor_id: str) -> Optional[Vendor]:
        with self.lock:
            return self.state.vendors.get(vendor_id)

    def list_products(self) -> list[Product]:
        with self.lock:
            return list(self.state.products.values())

    def get_product(self, product_id: str) -> Optional[Product]:
        with self.lock:
            return self.state.products.get(product_id)

    # ---------- Catalog writes ----------
    def add_product(self, brand: str, model: str, specs: str, purchase_price: float, sales_price: float) -> Product:
        with self.unit_of_work():
            product = Product(
                id=_new_id("p", self.state.products),
                brand=brand,
                model=model,
                specs=specs,
                purchase_price=float(purchase_price),
                sales_price=float(sales_price),
            )
            self.state.products[product.id] = product
        return product

    def add_vendor(self, name: str, contact: str, gst: str, address: str) -> Vendor:
        with self.unit_of_work():
            vendor = Vendor(id=_new_id("v", self.state.vendors), name=name, contact=contact, gst=gst, address=address)
            self.state.vendors[vendor.id] = vendor
        return vendor

    def add_store(self, name: str, location: str) -> Store:
        with self.unit_of_work():
            store = Store(id=_new_id("store_", self.state.stores), name=name, location=location)
            self.state.stores[store.id] = store
        return store

    def add_user(self, username: str, password: str, role: str, store_id: Optional[str], name: str) -> User:
        with self.unit_of_work():
            if self.get_user_by_username(username) is not None:
                raise ValidationError(f"Username '{username}' is already taken.")
            user = User(
                id=_new_id("user_", self.state.users),
                username=username,
                role=role,
                password=password,
                store_id=store_id,
                name=name,
            )
            self.state.users[user.id] = user
        return user

    def add_store_with_user(self, store_name: str, location: str, username: str, password: str) -> StoreAccount:
        with self.unit_of_work():
            store = self.add_store(store_name, location)
            user = self.add_user(username, password, ROLE_STORE_USER, store.id, f"{store_name} Manager")
        return StoreAccount(store=store, user=user)

    # ---------- Stock ----------
    def stock_for(self, store_id: str, product_id: str) -> int:
        with self.lock:
            return int(self.state.inventory.get((store_id, product_id), 0))

    def list_inventory_records(self, store_id: Optional[str] = None) -> list[InventoryRecord]:
        with self.lock:
            items = list(self.state.inventory.items())
        return [
            InventoryRecord(store_id=s, product_id=p, quantity=q)
            for (s, p), q in items
            if not store_id or s == store_id
        ]

    def apply_stock_delta(self, store_id: str, product_id: str, delta: int) -> None:
        key = (store_id, product_id)
        with self.unit_of_work():
            if key in self.state.inventory:
                self.state.inventory[key] += int(delta)
            elif delta > 0:
                self.state.inventory[key] = int(delta)

    # ---------- Ledgers ----------
    def record_transaction(
        self,
        kind: str,
        store_id: str,
        product_id: str,
        quantity: int,
        price: float,
        vendor_id: Optional[str] = None,
        customer_type: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Transaction:
        with self.unit_of_work():
            tx = Transaction(
                id=_new_id("t", (t.id for t in self.state.transactions)),
                kind=kind,
                store_id=store_id,
                product_id=product_id,
                quantity=int(quantity),
                price=float(price),
                date=_today_iso(),
                vendor_id=vendor_id,
                customer_type=customer_type,
                status=status,
            )
            self.state.transactions.append(tx)
            self.apply_stock_delta(store_id, product_id, tx.stock_delta)
        return tx

    def record_cash_entry(self, store_id: str, kind: str, amount: float, description: str, by: Optional[str]) -> CashEntry:
        with self.unit_of_work():
            entry = CashEntry(
                id=_new_id("pc", (c.id for c in self.state.petty_cash)),
                store_id=store_id,
                kind=kind,
                amount=float(amount),
                description=description,
                by=by,
                date=_today_iso(),
            )
            self.state.petty_cash.append(entry)
        return entry

    def list_transactions(self) -> list[Transaction]:
        with self.lock:
            return list(self.state.transactions)

    def list_cash_entries(self) -> list[CashEntry]:
        with self.lock:
            return list(self.state.petty_cash)

    # ---------- Derived views ----------
    # Views hold the lock while they join, so a reader never sees a
    # transaction whose stock effect is still being applied.
    def inventory_view(self, store_id: str) -> list[InventoryRow]:
        return self._inventory_rows(store_id, with_store_name=False)

    def all_inventory_view(self) -> list[InventoryRow]:
        return self._inventory_rows(None, with_store_name=True)

    def _inventory_rows(self, store_id: Optional[str], *, with_store_name: bool) -> list[InventoryRow]:
        with self.lock:
            products = dict(self.state.products)
            stores = dict(self.state.stores)
            inventory = list(self.state.inventory.items())

        out: list[InventoryRow] = []
        for (s_id, p_id), qty in inventory:
            if store_id and s_id != store_id:
                continue
            product = products.get(p_id)
            if product is None:
                continue
            store_name = None
            if with_store_name:
                store = stores.get(s_id)
                store_name = store.name if store else UNKNOWN
            out.append(
                InventoryRow(
                    store_id=s_id,
                    product_id=p_id,
                    quantity=int(qty),
                    brand=product.brand,
                    model=product.model,
                    specs=product.specs,
                    purchase_price=product.purchase_price,
                    sales_price=product.sales_price,
                    store_name=store_name,
                )
            )
        return out

    def transaction_view(self, store_id: Optional[str] = None) -> list[TransactionRow]:
        with self.lock:
            products = dict(self.state.products)
            stores = dict(self.state.stores)
            vendors = dict(self.state.vendors)
            transactions = list(self.state.transactions)

        out: list[TransactionRow] = []
        for t in reversed(transactions):
            if store_id and t.store_id != store_id:
                continue
            product = products.get(t.product_id)
            store = stores.get(t.store_id)
            vendor = vendors.get(t.vendor_id) if t.vendor_id else None
            out.append(
                TransactionRow(
                    id=t.id,
                    kind=t.kind,
                    store_id=t.store_id,
                    product_id=t.product_id,
                    quantity=t.quantity,
                    price=t.price,
                    date=t.date,
                    vendor_id=t.vendor_id,
                    customer_type=t.customer_type,
                    status=t.status,
                    product_name=product.display_name if product else UNKNOWN,
                    store_name=store.name if store else UNKNOWN,
                    vendor_name=vendor.name if vendor else NO_VENDOR,
                )
            )
        return out

    def cash_view(self, store_id: Optional[str] = None) -> list[CashRow]:
        with self.lock:
            stores = dict(self.state.stores)
            entries = list(self.state.petty_cash)

        out: list[CashRow] = []
        for c in reversed(entries):
            if store_id and c.store_id != store_id:
                continue
            store = stores.get(c.store_id)
            out.append(
                CashRow(
                    id=c.id,
                    store_id=c.store_id,
                    kind=c.kind,
                    amount=c.amount,
                    description=c.description,
                    by=c.by,
                    date=c.date,
                    store_name=store.name if store else UNKNOWN,
                )
            )
        return out

    def cash_balance(self, store_id: Optional[str] = None) -> float:
        return sum(c.signed_amount for c in self.list_cash_entries() if not store_id or c.store_id == store_id)

    def sales_total(self, store_id: Optional[str] = None, on_date: Optional[str] = None) -> float:
        return sum(
            t.total
            for t in self.list_transactions()
            if t.kind == SALE
            and (not store_id or t.store_id == store_id)
            and (on_date is None or t.date == on_date)
        )

    # ---------- Health ----------
    def count_orphans(self) -> dict[str, int]:
        with self.lock:
            stores = dict(self.state.stores)
            products = dict(self.state.products)
            vendors = dict(self.state.vendors)
            inventory = list(self.state.inventory)
            transactions = list(self.state.transactions)
            entries = list(self.state.petty_cash)

        def dangling(t: Transaction) -> bool:
            if t.store_id not in stores or t.product_id not in products:
                return True
            return bool(t.vendor_id) and t.vendor_id not in vendors

        return {
            "inventory": sum(1 for (s, p) in inventory if s not in stores or p not in products),
            "transactions": sum(1 for t in transactions if dangling(t)),
            "petty_cash": sum(1 for c in entries if c.store_id not in stores),
        }
