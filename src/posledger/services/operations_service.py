from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from posledger.domain.models import User
from posledger.services.auth_service import require_action

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class HealthReport:
    storage_integrity: str
    counts: dict[str, int]
    orphans: dict[str, int]
    generated_at: str

    @property
    def ok(self) -> bool:
        return self.storage_integrity == "ok" and not any(self.orphans.values())


class OperationsService:
    def __init__(self, repo):
        self.repo = repo

    def reset(self, actor: User | None = None) -> None:
        if actor is not None:
            require_action(actor, "reset")
        self.repo.reset()
        log.warning("ledger_reset actor=%s", actor.id if actor else None)

    def run_health_check(self) -> HealthReport:
        check = getattr(self.repo.store, "integrity_check", None)
        integrity = check() if check is not None else "unknown"
        counts = {
            "stores": len(self.repo.list_stores()),
            "users": len(self.repo.list_users()),
            "vendors": len(self.repo.list_vendors()),
            "products": len(self.repo.list_products()),
            "inventory": len(self.repo.list_inventory_records()),
            "transactions": len(self.repo.list_transactions()),
            "petty_cash": len(self.repo.list_cash_entries()),
        }
        return HealthReport(
            storage_integrity=integrity,
            counts=counts,
            orphans=self.repo.count_orphans(),
            generated_at=datetime.now().isoformat(timespec="seconds"),
        )
