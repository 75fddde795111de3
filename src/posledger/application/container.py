from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from posledger.config import LedgerSettings, load_settings
from posledger.repositories.document_store import SqliteDocumentStore
from posledger.repositories.ledger_repo import LedgerRepository
from posledger.services.auth_service import AuthService
from posledger.services.cash_service import CashService
from posledger.services.catalog_service import CatalogService
from posledger.services.inventory_service import InventoryService
from posledger.services.operations_service import OperationsService
from posledger.services.reporting_service import ReportingService
from posledger.services.transaction_service import TransactionService


@dataclass(frozen=True)
class AppContainer:
    repo: LedgerRepository
    settings: LedgerSettings
    auth: AuthService
    catalog: CatalogService
    inventory: InventoryService
    transactions: TransactionService
    cash: CashService
    reporting: ReportingService
    operations: OperationsService


def build_container(db_path: Path | str, settings: LedgerSettings | None = None) -> AppContainer:
    settings = settings or load_settings()

    repo = LedgerRepository(SqliteDocumentStore(db_path))
    repo.init_db()

    return AppContainer(
        repo=repo,
        settings=settings,
        auth=AuthService(repo),
        catalog=CatalogService(repo),
        inventory=InventoryService(repo, settings),
        transactions=TransactionService(repo, settings),
        cash=CashService(repo),
        reporting=ReportingService(repo, settings),
        operations=OperationsService(repo),
    )
