from __future__ import annotations

import logging
import math
from typing import Optional

from posledger.domain.errors import ValidationError
from posledger.domain.models import Product, Store, StoreAccount, User, Vendor
from posledger.services.auth_service import require_action

log = logging.getLogger(__name__)


def _text(value) -> str:
    return str(value or "").strip()


class CatalogService:
    def __init__(self, repo):
        self.repo = repo

    def list_stores(self) -> list[Store]:
        return self.repo.list_stores()

    def list_users(self) -> list[User]:
        return self.repo.list_users()

    def list_vendors(self) -> list[Vendor]:
        return self.repo.list_vendors()

    def list_products(self) -> list[Product]:
        return self.repo.list_products()

    def get_store(self, store_id: str) -> Optional[Store]:
        return self.repo.get_store(store_id)

    def get_product(self, product_id: str) -> Optional[Product]:
        return self.repo.get_product(product_id)

    def get_vendor(self, vendor_id: str) -> Optional[Vendor]:
        return self.repo.get_vendor(vendor_id)

    def add_product(
        self,
        brand: str,
        model: str,
        specs: str,
        purchase_price: float,
        sales_price: float,
        actor: User | None = None,
    ) -> Product:
        if actor is not None:
            require_action(actor, "add_product")

        brand = _text(brand)
        model = _text(model)
        if not brand or not model:
            raise ValidationError("Brand and Model are required.")
        if not math.isfinite(float(purchase_price)) or float(purchase_price) < 0:
            raise ValidationError("Purchase price must be >= 0.")
        if not math.isfinite(float(sales_price)) or float(sales_price) < 0:
            raise ValidationError("Sales price must be >= 0.")

        product = self.repo.add_product(brand, model, _text(specs), float(purchase_price), float(sales_price))
        log.info("product_added product_id=%s name=%s", product.id, product.display_name)
        return product

    def add_vendor(self, name: str, contact: str = "", gst: str = "", address: str = "", actor: User | None = None) -> Vendor:
        if actor is not None:
            require_action(actor, "add_vendor")

        name = _text(name)
        if not name:
            raise ValidationError("Vendor name is required.")

        vendor = self.repo.add_vendor(name, _text(contact), _text(gst), _text(address))
        log.info("vendor_added vendor_id=%s", vendor.id)
        return vendor

    def add_store(self, store_data: dict, user_data: dict, actor: User | None = None) -> StoreAccount:
        """Create a store together with its store_user login.

        store_data: {name, location}
        user_data:  {username, password}

        Both records are written in one unit of work; if the user cannot be
        created (e.g. username taken) the store is not kept either.
        """
        if actor is not None:
            require_action(actor, "add_store")

        name = _text(store_data.get("name"))
        username = _text(user_data.get("username"))
        password = str(user_data.get("password") or "")
        if not name:
            raise ValidationError("Store name is required.")
        if not username:
            raise ValidationError("Username is required.")
        if not password:
            raise ValidationError("Password is required.")

        account = self.repo.add_store_with_user(name, _text(store_data.get("location")), username, password)
        log.info("store_added store_id=%s user_id=%s", account.store.id, account.user.id)
        return account
