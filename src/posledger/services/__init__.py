from .auth_service import AuthService
from .catalog_service import CatalogService
from .inventory_service import InventoryService
from .transaction_service import TransactionService
from .cash_service import CashService
from .reporting_service import ReportingService
from .operations_service import OperationsService

__all__ = [
    "AuthService",
    "CatalogService",
    "InventoryService",
    "TransactionService",
    "CashService",
    "ReportingService",
    "OperationsService",
]
