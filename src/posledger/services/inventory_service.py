from __future__ import annotations

from typing import Optional

from posledger.config import LedgerSettings
from posledger.domain.models import InventoryRow, User
from posledger.services.auth_service import require_action


class InventoryService:
    def __init__(self, repo, settings: LedgerSettings | None = None):
        self.repo = repo
        self.settings = settings or LedgerSettings()

    def get_inventory(self, store_id: str, actor: User | None = None) -> list[InventoryRow]:
        if actor is not None:
            require_action(actor, "view_store", store_id)
        return self.repo.inventory_view(store_id)

    def get_all_inventory(self, actor: User | None = None) -> list[InventoryRow]:
        if actor is not None:
            require_action(actor, "view_all_stores")
        return self.repo.all_inventory_view()

    def stock_for(self, store_id: str, product_id: str) -> int:
        return self.repo.stock_for(store_id, product_id)

    def has_stock(self, store_id: str, product_id: str, qty: int) -> bool:
        return self.repo.stock_for(store_id, product_id) >= int(qty)

    def low_stock(self, store_id: Optional[str] = None, threshold: Optional[int] = None) -> list[InventoryRow]:
        limit = self.settings.low_stock_threshold if threshold is None else int(threshold)
        rows = self.repo.inventory_view(store_id) if store_id else self.repo.all_inventory_view()
        return [r for r in rows if r.quantity < limit]
