from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

SALE = "SALE"
PURCHASE = "PURCHASE"
TRANSACTION_KINDS = (SALE, PURCHASE)

CREDIT = "CREDIT"
DEBIT = "DEBIT"
CASH_KINDS = (CREDIT, DEBIT)

ROLE_ADMIN = "admin"
ROLE_STORE_USER = "store_user"

UNKNOWN = "Unknown"
NO_VENDOR = "—"


@dataclass(frozen=True)
class Store:
    id: str
    name: str
    location: str = ""


@dataclass(frozen=True)
class User:
    id: str
    username: str
    role: str
    password: str = field(default="", repr=False)
    store_id: Optional[str] = None
    name: str = ""


@dataclass(frozen=True)
class Vendor:
    id: str
    name: str
    contact: str = ""
    gst: str = ""
    address: str = ""


@dataclass(frozen=True)
class Product:
    id: str
    brand: str
    model: str
    specs: str
    purchase_price: float
    sales_price: float

    @property
    def display_name(self) -> str:
        return f"{self.brand} {self.model}"


@dataclass(frozen=True)
class InventoryRecord:
    store_id: str
    product_id: str
    quantity: int


@dataclass(frozen=True)
class Transaction:
    id: str
    kind: str
    store_id: str
    product_id: str
    quantity: int
    price: float
    date: str
    vendor_id: Optional[str] = None
    customer_type: Optional[str] = None
    status: Optional[str] = None

    @property
    def total(self) -> float:
        return self.price * self.quantity

    @property
    def stock_delta(self) -> int:
        return -self.quantity if self.kind == SALE else self.quantity


@dataclass(frozen=True)
class CashEntry:
    id: str
    store_id: str
    kind: str
    amount: float
    description: str
    by: Optional[str]
    date: str

    @property
    def signed_amount(self) -> float:
        return self.amount if self.kind == CREDIT else -self.amount


@dataclass(frozen=True)
class StoreAccount:
    store: Store
    user: User


# ---------- Joined rows (derived views) ----------

@dataclass(frozen=True)
class InventoryRow:
    store_id: str
    product_id: str
    quantity: int
    brand: str
    model: str
    specs: str
    purchase_price: float
    sales_price: float
    store_name: Optional[str] = None

    @property
    def product_name(self) -> str:
        return f"{self.brand} {self.model}"

    @property
    def stock_value(self) -> float:
        return self.purchase_price * self.quantity


@dataclass(frozen=True)
class TransactionRow:
    id: str
    kind: str
    store_id: str
    product_id: str
    quantity: int
    price: float
    date: str
    vendor_id: Optional[str]
    customer_type: Optional[str]
    status: Optional[str]
    product_name: str
    store_name: str
    vendor_name: str

    @property
    def total(self) -> float:
        return self.price * self.quantity


@dataclass(frozen=True)
class CashRow:
    id: str
    store_id: str
    kind: str
    amount: float
    description: str
    by: Optional[str]
    date: str
    store_name: str
