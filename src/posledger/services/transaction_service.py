from __future__ import annotations

import logging
import math
from typing import Callable, Optional

from posledger.config import LedgerSettings
from posledger.domain.errors import InsufficientStockError, NotFoundError, ValidationError
from posledger.domain.models import PURCHASE, SALE, TRANSACTION_KINDS, Transaction, TransactionRow, User
from posledger.repositories.unit_of_work import UnitOfWork
from posledger.services.auth_service import require_action

log = logging.getLogger("posledger.transactions")


def _whole_quantity(quantity) -> int:
    if isinstance(quantity, int):
        return quantity
    value = float(quantity)
    if not value.is_integer():
        raise ValidationError(f"Qty must be a whole number. Received: {quantity}")
    return int(value)


class TransactionService:
    def __init__(
        self,
        repo,
        settings: LedgerSettings | None = None,
        uow_factory: Callable[[], UnitOfWork] | None = None,
    ):
        self.repo = repo
        self.settings = settings or LedgerSettings()
        self.uow_factory = uow_factory or repo.unit_of_work

    def add_transaction(
        self,
        kind: str,
        store_id: str,
        product_id: str,
        quantity: int,
        price: float,
        vendor_id: Optional[str] = None,
        customer_type: Optional[str] = None,
        status: Optional[str] = None,
        actor: User | None = None,
    ) -> Transaction:
        """Record a SALE or PURCHASE and apply its stock effect.

        Stock is not checked here unless ``enforce_stock_on_sale`` is set;
        store-front sales go through ``record_sale``, which always checks.
        """
        return self._record(
            kind,
            store_id,
            product_id,
            quantity,
            price,
            vendor_id=vendor_id,
            customer_type=customer_type,
            status=status,
            actor=actor,
            check_stock=self.settings.enforce_stock_on_sale,
        )

    def record_sale(
        self,
        store_id: str,
        product_id: str,
        quantity: int,
        price: float,
        customer_type: Optional[str] = None,
        actor: User | None = None,
    ) -> Transaction:
        return self._record(
            SALE,
            store_id,
            product_id,
            quantity,
            price,
            customer_type=customer_type,
            actor=actor,
            check_stock=True,
        )

    def record_purchase(
        self,
        store_id: str,
        product_id: str,
        quantity: int,
        price: float,
        vendor_id: str,
        status: Optional[str] = "Approved",
        actor: User | None = None,
    ) -> Transaction:
        if not vendor_id:
            raise ValidationError("Vendor is required for a purchase.")
        return self._record(
            PURCHASE,
            store_id,
            product_id,
            quantity,
            price,
            vendor_id=vendor_id,
            status=status,
            actor=actor,
            check_stock=False,
        )

    def _record(
        self,
        kind: str,
        store_id: str,
        product_id: str,
        quantity: int,
        price: float,
        *,
        vendor_id: Optional[str] = None,
        customer_type: Optional[str] = None,
        status: Optional[str] = None,
        actor: User | None = None,
        check_stock: bool = False,
    ) -> Transaction:
        kind = str(kind or "").strip().upper()
        if kind not in TRANSACTION_KINDS:
            raise ValidationError(f"Unknown transaction type: {kind or '(empty)'}")
        if actor is not None:
            require_action(actor, "record_sale" if kind == SALE else "record_purchase", store_id)

        qty = _whole_quantity(quantity)
        unit_price = float(price)
        if qty <= 0:
            raise ValidationError("Qty must be >= 1.")
        if not math.isfinite(unit_price) or unit_price < 0:
            raise ValidationError("Price must be >= 0.")

        with self.uow_factory():
            # references and stock are checked under the same lock as the insert
            if not self.repo.get_store(store_id):
                raise NotFoundError(f"Store not found: {store_id}")
            if not self.repo.get_product(product_id):
                raise NotFoundError(f"Product not found: {product_id}")
            if vendor_id and not self.repo.get_vendor(vendor_id):
                raise NotFoundError(f"Vendor not found: {vendor_id}")

            if check_stock and kind == SALE:
                available = self.repo.stock_for(store_id, product_id)
                if qty > available:
                    log.warning(
                        "sale_rejected store=%s product=%s qty=%s available=%s", store_id, product_id, qty, available
                    )
                    raise InsufficientStockError(f"Insufficient stock for {product_id}. Available: {available}")

            tx = self.repo.record_transaction(
                kind,
                store_id,
                product_id,
                qty,
                unit_price,
                vendor_id=vendor_id if kind == PURCHASE else None,
                customer_type=customer_type if kind == SALE else None,
                status=status,
            )

        log.info(
            "transaction_recorded tx_id=%s kind=%s store=%s product=%s qty=%s price=%.2f actor=%s",
            tx.id,
            tx.kind,
            store_id,
            product_id,
            qty,
            unit_price,
            actor.id if actor else None,
        )
        return tx

    def get_transactions(self, store_id: Optional[str] = None, actor: User | None = None) -> list[TransactionRow]:
        if actor is not None:
            if store_id:
                require_action(actor, "view_store", store_id)
            else:
                require_action(actor, "view_all_stores")
        return self.repo.transaction_view(store_id)
