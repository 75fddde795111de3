from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Optional

from posledger.domain.models import CashEntry, Product, Store, Transaction, User, Vendor


@dataclass
class LedgerState:
    """In-memory ledger, indexed by id.

    Catalog collections are dicts keyed by id (insertion-ordered), inventory is
    keyed by (store_id, product_id) so a pair can only ever hold one record.
    """

    stores: dict[str, Store] = field(default_factory=dict)
    users: dict[str, User] = field(default_factory=dict)
    vendors: dict[str, Vendor] = field(default_factory=dict)
    products: dict[str, Product] = field(default_factory=dict)
    inventory: dict[tuple[str, str], int] = field(default_factory=dict)
    transactions: list[Transaction] = field(default_factory=list)
    petty_cash: list[CashEntry] = field(default_factory=list)
    current_session: Optional[dict] = None

    def snapshot(self) -> "LedgerState":
        # records are frozen, so copying the containers is enough
        return LedgerState(
            stores=dict(self.stores),
            users=dict(self.users),
            vendors=dict(self.vendors),
            products=dict(self.products),
            inventory=dict(self.inventory),
            transactions=list(self.transactions),
            petty_cash=list(self.petty_cash),
            current_session=copy.deepcopy(self.current_session),
        )

    def restore(self, other: "LedgerState") -> None:
        self.stores = other.stores
        self.users = other.users
        self.vendors = other.vendors
        self.products = other.products
        self.inventory = other.inventory
        self.transactions = other.transactions
        self.petty_cash = other.petty_cash
        self.current_session = other.current_session

    # ---------- Document codec ----------
    @classmethod
    def from_document(cls, doc: dict) -> "LedgerState":
        state = cls()
        for r in doc.get("stores") or []:
            s = _store_from(r)
            state.stores[s.id] = s
        for r in doc.get("users") or []:
            u = _user_from(r)
            state.users[u.id] = u
        for r in doc.get("vendors") or []:
            v = _vendor_from(r)
            state.vendors[v.id] = v
        for r in doc.get("products") or []:
            p = _product_from(r)
            state.products[p.id] = p
        for r in doc.get("inventory") or []:
            key = (str(r["storeId"]), str(r["productId"]))
            # duplicates in a hand-edited document collapse into one running total
            state.inventory[key] = state.inventory.get(key, 0) + int(r.get("quantity", 0))
        state.transactions = [_transaction_from(r) for r in doc.get("transactions") or []]
        state.petty_cash = [_cash_from(r) for r in doc.get("pettyCash") or []]
        state.current_session = _session_from(doc.get("currentSession"))
        return state

    def to_document(self) -> dict:
        return {
            "currentSession": copy.deepcopy(self.current_session),
            "stores": [{"id": s.id, "name": s.name, "location": s.location} for s in self.stores.values()],
            "users": [_user_to(u) for u in self.users.values()],
            "vendors": [
                {"id": v.id, "name": v.name, "contact": v.contact, "gst": v.gst, "address": v.address}
                for v in self.vendors.values()
            ],
            "products": [
                {
                    "id": p.id,
                    "brand": p.brand,
                    "model": p.model,
                    "specs": p.specs,
                    "purchasePrice": p.purchase_price,
                    "salesPrice": p.sales_price,
                }
                for p in self.products.values()
            ],
            "inventory": [
                {"storeId": store_id, "productId": product_id, "quantity": qty}
                for (store_id, product_id), qty in self.inventory.items()
            ],
            "transactions": [_transaction_to(t) for t in self.transactions],
            "pettyCash": [
                {
                    "id": c.id,
                    "storeId": c.store_id,
                    "type": c.kind,
                    "amount": c.amount,
                    "description": c.description,
                    "date": c.date,
                    "by": c.by,
                }
                for c in self.petty_cash
            ],
        }


def _opt(value) -> Optional[str]:
    return str(value) if value is not None else None


def _store_from(r: dict) -> Store:
    return Store(id=str(r["id"]), name=str(r.get("name", "")), location=str(r.get("location") or ""))


def _user_from(r: dict) -> User:
    return User(
        id=str(r["id"]),
        username=str(r["username"]),
        role=str(r.get("role", "")),
        password=str(r.get("password") or ""),
        store_id=_opt(r.get("storeId")),
        name=str(r.get("name") or ""),
    )


def _user_to(u: User) -> dict:
    out = {"id": u.id, "username": u.username, "password": u.password, "role": u.role, "name": u.name}
    if u.store_id is not None:
        out["storeId"] = u.store_id
    return out


def _vendor_from(r: dict) -> Vendor:
    return Vendor(
        id=str(r["id"]),
        name=str(r.get("name", "")),
        contact=str(r.get("contact") or ""),
        gst=str(r.get("gst") or ""),
        address=str(r.get("address") or ""),
    )


def _product_from(r: dict) -> Product:
    return Product(
        id=str(r["id"]),
        brand=str(r.get("brand", "")),
        model=str(r.get("model", "")),
        specs=str(r.get("specs") or ""),
        purchase_price=float(r.get("purchasePrice") or 0),
        sales_price=float(r.get("salesPrice") or 0),
    )


def _transaction_from(r: dict) -> Transaction:
    return Transaction(
        id=str(r["id"]),
        kind=str(r["type"]),
        store_id=str(r["storeId"]),
        product_id=str(r["productId"]),
        quantity=int(r["quantity"]),
        price=float(r.get("price") or 0),
        date=str(r.get("date", "")),
        vendor_id=_opt(r.get("vendorId")),
        customer_type=_opt(r.get("customerType")),
        status=_opt(r.get("status")),
    )


def _transaction_to(t: Transaction) -> dict:
    out = {
        "id": t.id,
        "type": t.kind,
        "storeId": t.store_id,
        "productId": t.product_id,
        "quantity": t.quantity,
        "price": t.price,
        "date": t.date,
    }
    if t.vendor_id is not None:
        out["vendorId"] = t.vendor_id
    if t.customer_type is not None:
        out["customerType"] = t.customer_type
    if t.status is not None:
        out["status"] = t.status
    return out


def _cash_from(r: dict) -> CashEntry:
    return CashEntry(
        id=str(r["id"]),
        store_id=str(r["storeId"]),
        kind=str(r["type"]),
        amount=float(r["amount"]),
        description=str(r.get("description") or ""),
        by=_opt(r.get("by")),
        date=str(r.get("date", "")),
    )


def _session_from(raw) -> Optional[dict]:
    if not isinstance(raw, dict):
        return None
    # older documents stored the whole user record as the session
    user_id = raw.get("userId") or raw.get("id")
    if not user_id:
        return None
    return {"userId": str(user_id), "token": raw.get("token"), "startedAt": raw.get("startedAt")}
