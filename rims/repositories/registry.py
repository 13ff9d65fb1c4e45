from fastapi import Request

from rims.database import Database
from rims.repositories.accounts import AccountRepository
from rims.repositories.boms import BOMRepository
from rims.repositories.cost_history import CostHistoryRepository
from rims.repositories.item_templates import ItemTemplateRepository
from rims.repositories.items import ItemRepository
from rims.repositories.stock_history import StockHistoryRepository
from rims.repositories.vendor_price_cache import VendorPriceCacheRepository


class Repositories:
    """Every repository, bound to one open :class:`Database`."""

    def __init__(self, db: Database):
        self.db = db
        self.accounts = AccountRepository(db)
        self.items = ItemRepository(db)
        self.stock_history = StockHistoryRepository(db)
        self.cost_history = CostHistoryRepository(db)
        self.boms = BOMRepository(db)
        self.item_templates = ItemTemplateRepository(db)
        self.vendor_price_cache = VendorPriceCacheRepository(db)

    def counts(self) -> dict[str, int]:
        return {
            "users": self.accounts.count(),
            "items": self.items.count(),
            "stockHistory": self.stock_history.count(),
            "costHistory": self.cost_history.count(),
            "boms": self.boms.count(),
            "itemTemplates": self.item_templates.count(),
            "vendorPriceCache": self.vendor_price_cache.count(),
        }


def get_repos(request: Request) -> Repositories:
    return request.app.state.repos
