"""One-time transfer of the flat key-value data format into the relational schema.

Records keep their original ids so that soft references (stock history item
ids, BOM lines) stay valid. The transfer can be re-run safely: rows whose id
is already present are skipped, and the legacy keys are only removed once the
migrated snapshot has been written.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from rims.database import Database
from rims.mapper import build_insert
from rims.repositories.registry import Repositories
from rims.schemas.account import Account
from rims.schemas.bom import BOM
from rims.schemas.cost_history import CostHistoryEntry
from rims.schemas.item import Item
from rims.schemas.item_template import ItemTemplate
from rims.schemas.stock_history import StockHistoryEntry
from rims.schemas.vendor import VendorPriceResult
from rims.services.account_service import hash_password, is_password_hash
from rims.storage import KeyValueStore, get_json

logger = logging.getLogger(__name__)

LEGACY_INITIALIZED_KEY = "rims_initialized"
LEGACY_VENDOR_PRICE_CACHE_KEY = "rims_vendor_price_cache"


def _prepare_account(account: Account) -> dict[str, Any]:
    fields = account.model_dump(by_alias=True)
    # The flat format had no e-mail verification
    fields["emailVerified"] = True
    fields["emailVerificationToken"] = None
    fields["emailVerificationTokenExpiresAt"] = None
    if not is_password_hash(account.password):
        fields["password"] = hash_password(account.password)
    return fields


def _prepare_item(item: Item) -> dict[str, Any]:
    fields = item.model_dump(by_alias=True)
    fields["value"] = item.quantity * item.unit_value
    return fields


@dataclass(frozen=True)
class LegacyCollection:
    name: str
    storage_key: str
    table: str
    model: type[BaseModel]
    json_fields: tuple[str, ...] = ()
    prepare: Callable[[Any], dict[str, Any]] = field(default=lambda record: record.model_dump(by_alias=True))


LEGACY_COLLECTIONS = [
    LegacyCollection("users", "rims_users", "users", Account, prepare=_prepare_account),
    LegacyCollection("items", "rims_items", "items", Item, prepare=_prepare_item),
    LegacyCollection("stockHistory", "rims_stock_history", "stock_history", StockHistoryEntry),
    LegacyCollection("costHistory", "rims_cost_history", "cost_history", CostHistoryEntry),
    LegacyCollection("boms", "rims_boms", "boms", BOM, json_fields=("items",)),
    LegacyCollection("itemTemplates", "rims_item_templates", "item_templates", ItemTemplate, json_fields=("defaultFields",)),
]

LEGACY_DATA_KEYS = [c.storage_key for c in LEGACY_COLLECTIONS] + [LEGACY_VENDOR_PRICE_CACHE_KEY]


class MigrationResult(BaseModel):
    migrated: bool
    counts: dict[str, int]
    skipped: dict[str, int]
    failed: dict[str, int]
    cleaned_up: bool


class MigrationVerification(BaseModel):
    valid: bool
    counts: dict[str, int]


def has_legacy_data(store: KeyValueStore) -> bool:
    if not get_json(store, LEGACY_INITIALIZED_KEY):
        return False
    for key in LEGACY_DATA_KEYS:
        raw = store.get(key)
        if raw and raw.strip() not in ("[]", "{}"):
            return True
    return False


def _record_label(record: Any) -> str:
    if isinstance(record, dict):
        return str(record.get("email") or record.get("name") or record.get("id"))
    return repr(record)


def _row_exists(db: Database, table: str, record_id: int) -> bool:
    return bool(db.query(f"SELECT 1 FROM {table} WHERE id = ?", [record_id]))


def _migrate_collection(db: Database, store: KeyValueStore, collection: LegacyCollection) -> tuple[int, int, int]:
    records = get_json(store, collection.storage_key)
    if not records:
        return 0, 0, 0
    if not isinstance(records, list):
        logger.warning("Legacy %s is not a list, skipping", collection.storage_key)
        return 0, 0, 1

    migrated = skipped = failed = 0
    for record in records:
        try:
            entity = collection.model.model_validate(record)
            if _row_exists(db, collection.table, entity.id):
                skipped += 1
                continue
            insert = build_insert(collection.table, collection.prepare(entity), collection.json_fields)
            db.transaction([insert, db.id_watermark_statement(collection.table, entity.id)], persist=False)
            migrated += 1
        except (ValueError, TypeError, SQLAlchemyError) as e:
            failed += 1
            logger.warning("Failed to migrate %s record %s: %s", collection.name, _record_label(record), e)
    return migrated, skipped, failed


def _migrate_vendor_cache(repos: Repositories, store: KeyValueStore) -> tuple[int, int]:
    cache = get_json(store, LEGACY_VENDOR_PRICE_CACHE_KEY)
    if not cache:
        return 0, 0
    if not isinstance(cache, dict):
        logger.warning("Legacy %s is not an object, skipping", LEGACY_VENDOR_PRICE_CACHE_KEY)
        return 0, 1

    migrated = failed = 0
    for key, entry in cache.items():
        try:
            repos.vendor_price_cache.upsert(key, VendorPriceResult.model_validate(entry), persist=False)
            migrated += 1
        except (ValueError, TypeError, SQLAlchemyError) as e:
            failed += 1
            logger.warning("Failed to migrate vendor price cache entry %s: %s", key, e)
    return migrated, failed


def clear_legacy_data(store: KeyValueStore) -> None:
    for key in LEGACY_DATA_KEYS:
        store.remove(key)
    # Flag goes last so an interrupted cleanup is detected again
    store.remove(LEGACY_INITIALIZED_KEY)
    logger.info("Legacy key-value data cleared")


def migrate_legacy_data(repos: Repositories, store: KeyValueStore) -> MigrationResult:
    db = repos.db
    if not db.is_initialized:
        raise RuntimeError("Database must be initialized before migrating legacy data")

    counts: dict[str, int] = {}
    skipped: dict[str, int] = {}
    failed: dict[str, int] = {}
    for collection in LEGACY_COLLECTIONS:
        counts[collection.name], skipped[collection.name], failed[collection.name] = _migrate_collection(
            db, store, collection
        )
    counts["vendorPriceCache"], failed["vendorPriceCache"] = _migrate_vendor_cache(repos, store)
    skipped["vendorPriceCache"] = 0

    cleaned_up = False
    if db.persist():
        clear_legacy_data(store)
        cleaned_up = True
    else:
        logger.error("Migrated data could not be saved; legacy data kept for the next start")

    logger.info("Migration completed: %s (skipped %s, failed %s)", counts, skipped, failed)
    return MigrationResult(migrated=True, counts=counts, skipped=skipped, failed=failed, cleaned_up=cleaned_up)


def verify_migration(repos: Repositories) -> MigrationVerification:
    counts = repos.counts()
    # Weak check: anything at all made it across
    return MigrationVerification(valid=any(n > 0 for n in counts.values()), counts=counts)
