from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from posledger.repositories.ledger_repo import LedgerRepository
    from posledger.repositories.state import LedgerState

log = logging.getLogger(__name__)


class UnitOfWork(Protocol):
    def __enter__(self) -> "UnitOfWork": ...
    def __exit__(self, exc_type, exc, tb) -> None: ...


@dataclass
class RepositoryUnitOfWork:
    """Unit of Work for ledger writes.

    Holds the repository lock for its whole duration, so a read-check-write
    sequence inside one unit cannot interleave with another writer. Units nest:
    only the outermost one persists, and any failure (including the durable
    write itself) restores the state captured on entry.
    """

    repo: "LedgerRepository"
    _snapshot: Optional["LedgerState"] = field(default=None, init=False, repr=False)

    def __enter__(self) -> "RepositoryUnitOfWork":
        self.repo.lock.acquire()
        self.repo._depth += 1
        self._snapshot = self.repo.state.snapshot()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if exc_type is not None:
                self.repo.state.restore(self._snapshot)
                log.warning("ledger_rollback error=%s", exc)
            elif self.repo._depth == 1:
                try:
                    self.repo.save()
                except Exception as save_exc:
                    self.repo.state.restore(self._snapshot)
                    log.error("ledger_save_failed rolled_back=1 error=%s", save_exc)
                    raise
        finally:
            self._snapshot = None
            self.repo._depth -= 1
            self.repo.lock.release()
        return None
