from sqlalchemy import Float, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from rims.database import Base


class VendorPriceCacheRecord(Base):
    __tablename__ = "vendor_price_cache"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    cache_key: Mapped[str] = mapped_column(Text, unique=True, nullable=False)  # "<vendor>-<part>" lowercased
    vendor: Mapped[str] = mapped_column(Text, nullable=False)
    part_number: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    in_stock: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    stock_quantity: Mapped[int | None] = mapped_column(Integer)
    vendor_url: Mapped[str | None] = mapped_column(Text)
    last_checked: Mapped[str] = mapped_column(Text, nullable=False)
