from .models import (
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
from .errors import AppError, ValidationError, NotFoundError, InsufficientStockError, AuthorizationError

__all__ = [
    "CashEntry",
    "CashRow",
    "InventoryRecord",
    "InventoryRow",
    "Product",
    "Store",
    "StoreAccount",
    "Transaction",
    "TransactionRow",
    "User",
    "Vendor",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "InsufficientStockError",
    "AuthorizationError",
]
