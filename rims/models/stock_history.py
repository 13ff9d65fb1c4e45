from sqlalchemy import Float, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from rims.database import Base


class StockHistoryRecord(Base):
    """Append-only ledger of item changes.

    ``item_id`` is a soft reference: rows outlive the item they describe, so
    there is no foreign key and ``item_name`` keeps a snapshot of the name.
    """

    __tablename__ = "stock_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    item_id: Mapped[int] = mapped_column(Integer, nullable=False)
    item_name: Mapped[str] = mapped_column(Text, nullable=False)
    change_type: Mapped[str] = mapped_column(Text, nullable=False)  # created, updated, deleted, adjusted, category_changed
    previous_quantity: Mapped[int | None] = mapped_column(Integer)
    new_quantity: Mapped[int | None] = mapped_column(Integer)
    previous_value: Mapped[float | None] = mapped_column(Float)
    new_value: Mapped[float | None] = mapped_column(Float)
    previous_category: Mapped[str | None] = mapped_column(Text)
    new_category: Mapped[str | None] = mapped_column(Text)
    notes: Mapped[str] = mapped_column(Text, nullable=False, server_default="")
    user_id: Mapped[int | None] = mapped_column(Integer)
    user_email: Mapped[str | None] = mapped_column(Text)
    timestamp: Mapped[str] = mapped_column(Text, nullable=False)
