from pydantic import field_validator

from rims.schemas.base import CamelModel
from rims.time_utils import epoch_ms_to_iso, parse_iso, to_iso


class VendorPriceResult(CamelModel):
    vendor: str
    part_number: str
    price: float
    in_stock: bool
    stock_quantity: int | None = None
    vendor_url: str | None = None
    last_checked: str

    @field_validator("last_checked", mode="before")
    @classmethod
    def parse_last_checked(cls, v):
        # Older data stored epoch milliseconds
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return epoch_ms_to_iso(v)
        # Stored form must compare lexically, so always millisecond UTC with Z
        if isinstance(v, str):
            return to_iso(parse_iso(v))
        return v
