from __future__ import annotations

import copy

_SEED_DOCUMENT: dict = {
    "currentSession": None,
    "stores": [
        {"id": "store_1", "name": "Univercell Market", "location": "Downtown"},
        {"id": "store_2", "name": "AZ Store", "location": "Uptown"},
    ],
    "users": [
        {"id": "admin", "username": "admin", "password": "123", "role": "admin", "name": "Super Admin"},
        {
            "id": "user1",
            "username": "univercell",
            "password": "123",
            "role": "store_user",
            "storeId": "store_1",
            "name": "Univercell Manager",
        },
        {
            "id": "user2",
            "username": "azstore",
            "password": "123",
            "role": "store_user",
            "storeId": "store_2",
            "name": "AZ Manager",
        },
    ],
    "vendors": [
        {"id": "v1", "name": "Global Mobiles Supply", "contact": "555-0101", "gst": "GST12345", "address": "123 Supply St"},
        {"id": "v2", "name": "Tech Aggregators", "contact": "555-0102", "gst": "GST67890", "address": "456 Tech Ave"},
    ],
    "products": [
        {"id": "p1", "brand": "Samsung", "model": "Galaxy S24", "specs": "8GB/256GB", "purchasePrice": 70000, "salesPrice": 75000},
        {"id": "p2", "brand": "Apple", "model": "iPhone 15", "specs": "128GB", "purchasePrice": 65000, "salesPrice": 72000},
        {"id": "p3", "brand": "Xiaomi", "model": "Note 13", "specs": "6GB/128GB", "purchasePrice": 15000, "salesPrice": 18000},
    ],
    # opening stock, not backed by transactions
    "inventory": [
        {"storeId": "store_1", "productId": "p1", "quantity": 10},
        {"storeId": "store_1", "productId": "p2", "quantity": 5},
        {"storeId": "store_2", "productId": "p1", "quantity": 8},
        {"storeId": "store_2", "productId": "p3", "quantity": 20},
    ],
    "transactions": [
        {
            "id": "t1",
            "type": "PURCHASE",
            "storeId": "store_1",
            "vendorId": "v1",
            "productId": "p1",
            "quantity": 10,
            "price": 70000,
            "date": "2024-05-01",
            "status": "Approved",
        },
        {
            "id": "t2",
            "type": "SALE",
            "storeId": "store_1",
            "customerType": "Retail",
            "productId": "p1",
            "quantity": 1,
            "price": 75000,
            "date": "2024-05-02",
        },
    ],
    "pettyCash": [
        {
            "id": "pc1",
            "storeId": "store_1",
            "type": "CREDIT",
            "amount": 5000,
            "description": "Weekly Allowance from Admin",
            "date": "2024-05-01",
            "by": "admin",
        },
        {
            "id": "pc2",
            "storeId": "store_1",
            "type": "DEBIT",
            "amount": 200,
            "description": "Tea & Snacks",
            "date": "2024-05-02",
            "by": "user1",
        },
    ],
}


def seed_document() -> dict:
    """Fresh copy of the dataset installed on first start and on reset."""
    return copy.deepcopy(_SEED_DOCUMENT)
