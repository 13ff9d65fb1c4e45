from sqlalchemy import Float, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from rims.database import Base


class ItemRecord(Base):
    __tablename__ = "items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, server_default="")
    product_model_number: Mapped[str] = mapped_column(Text, nullable=False, server_default="")
    vendor_part_number: Mapped[str] = mapped_column(Text, nullable=False, server_default="")
    vendor_name: Mapped[str] = mapped_column(Text, nullable=False, server_default="")
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    unit_value: Mapped[float] = mapped_column(Float, nullable=False, server_default="0")
    # quantity * unit_value, kept in step by the item repository
    value: Mapped[float] = mapped_column(Float, nullable=False, server_default="0")
    picture: Mapped[str | None] = mapped_column(Text)  # data URL or NULL
    vendor_url: Mapped[str] = mapped_column(Text, nullable=False, server_default="")
    category: Mapped[str] = mapped_column(Text, nullable=False, server_default="")
    location: Mapped[str] = mapped_column(Text, nullable=False, server_default="")
    barcode: Mapped[str] = mapped_column(Text, nullable=False, server_default="")
    reorder_point: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    created_at: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[str] = mapped_column(Text, nullable=False)
