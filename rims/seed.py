import logging

from rims.repositories.registry import Repositories
from rims.schemas.item import ItemCreate
from rims.services import account_service

logger = logging.getLogger(__name__)

SEED_PASSWORD = "changeme"

SEED_ACCOUNTS = [
    {"email": "admin@example.com", "role": "admin"},
    {"email": "user@example.com", "role": "user"},
]

SEED_ITEMS = [
    ItemCreate(
        name="Arduino Uno",
        description="The Arduino Uno is a microcontroller board based on the ATmega328.",
        product_model_number="R3",
        vendor_part_number="50",
        vendor_name="Adafruit",
        quantity=8,
        unit_value=24.95,
        vendor_url="https://www.adafruit.com/product/50",
        category="Arduino",
        location="H1LD1B1",
        barcode="RIMS-0001",
        reorder_point=5,
    ),
    ItemCreate(
        name="Arduino Mega 2560",
        description="The Arduino Mega 2560 is a microcontroller board based on the ATmega2560.",
        product_model_number="R3",
        vendor_part_number="191",
        vendor_name="Adafruit",
        quantity=1,
        unit_value=45.95,
        vendor_url="https://www.adafruit.com/product/191",
        category="Arduino",
        location="H1LD1B3",
        barcode="RIMS-0002",
        reorder_point=2,
    ),
]


def is_empty(repos: Repositories) -> bool:
    return repos.accounts.count() == 0 and repos.items.count() == 0


def seed_database(repos: Repositories) -> None:
    for account in SEED_ACCOUNTS:
        account_service.create_account(
            repos, account["email"], SEED_PASSWORD, role=account["role"], email_verified=True
        )
    for item in SEED_ITEMS:
        repos.items.create_with_value(item)
    logger.info("Seeded %d accounts and %d items", len(SEED_ACCOUNTS), len(SEED_ITEMS))
