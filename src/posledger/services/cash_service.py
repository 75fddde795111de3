from __future__ import annotations

import logging
import math
from typing import Optional

from posledger.domain.errors import NotFoundError, ValidationError
from posledger.domain.models import CASH_KINDS, CashEntry, CashRow, User
from posledger.services.auth_service import require_action

log = logging.getLogger("posledger.cash")


class CashService:
    def __init__(self, repo):
        self.repo = repo

    def add_entry(
        self,
        store_id: str,
        kind: str,
        amount: float,
        description: str = "",
        by: Optional[str] = None,
        actor: User | None = None,
    ) -> CashEntry:
        kind = str(kind or "").strip().upper()
        if kind not in CASH_KINDS:
            raise ValidationError(f"Unknown cash entry type: {kind or '(empty)'}")
        if actor is not None:
            require_action(actor, "record_cash_entry", store_id)

        value = float(amount)
        if not math.isfinite(value) or value <= 0:
            raise ValidationError("Amount must be > 0.")

        if by is None and actor is not None:
            by = actor.username

        with self.repo.unit_of_work():
            if not self.repo.get_store(store_id):
                raise NotFoundError(f"Store not found: {store_id}")
            entry = self.repo.record_cash_entry(store_id, kind, value, str(description or "").strip(), by)
        log.info("cash_entry_recorded entry_id=%s store=%s kind=%s amount=%.2f by=%s", entry.id, store_id, kind, value, by)
        return entry

    def get_entries(self, store_id: Optional[str] = None, actor: User | None = None) -> list[CashRow]:
        if actor is not None:
            if store_id:
                require_action(actor, "view_store", store_id)
            else:
                require_action(actor, "view_all_stores")
        return self.repo.cash_view(store_id)

    def balance(self, store_id: Optional[str] = None) -> float:
        """CREDIT minus DEBIT over every entry of the store (all stores when omitted)."""
        return float(self.repo.cash_balance(store_id))
