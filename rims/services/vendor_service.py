from datetime import timedelta

from rims.config import settings
from rims.repositories.registry import Repositories
from rims.repositories.vendor_price_cache import cache_key
from rims.schemas.vendor import VendorPriceResult
from rims.services import cost_history_service
from rims.time_utils import parse_iso, utcnow


def max_cache_age() -> timedelta:
    return timedelta(seconds=settings.VENDOR_CACHE_MAX_AGE_SECONDS)


def is_cache_valid(result: VendorPriceResult) -> bool:
    return utcnow() - parse_iso(result.last_checked) < max_cache_age()


def get_cached_price(repos: Repositories, vendor: str, part_number: str) -> VendorPriceResult | None:
    """Fresh cached lookup, or None if missing or stale."""
    result = repos.vendor_price_cache.find_by_cache_key(cache_key(vendor, part_number))
    if result and is_cache_valid(result):
        return result
    return None


def store_price(repos: Repositories, result: VendorPriceResult) -> None:
    repos.vendor_price_cache.upsert(cache_key(result.vendor, result.part_number), result)


def apply_vendor_price(repos: Repositories, item_id: int, result: VendorPriceResult):
    """Take a looked-up price as the item's unit value, logging the cost change."""
    item = repos.items.get_by_id(item_id)
    if not item:
        return None
    updated = repos.items.update_with_value(item_id, {"unitValue": result.price})
    cost_history_service.record_cost_change(repos, item_id, item.unit_value, result.price, source="vendor_lookup")
    return updated


def purge_expired(repos: Repositories) -> int:
    return repos.vendor_price_cache.delete_expired(max_cache_age())
