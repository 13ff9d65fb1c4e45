from sqlalchemy import Float, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from rims.database import Base


class CostHistoryRecord(Base):
    __tablename__ = "cost_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    item_id: Mapped[int] = mapped_column(Integer, nullable=False)
    old_value: Mapped[float] = mapped_column(Float, nullable=False)
    new_value: Mapped[float] = mapped_column(Float, nullable=False)
    source: Mapped[str] = mapped_column(Text, nullable=False, server_default="manual")  # manual, vendor_lookup, import
    timestamp: Mapped[str] = mapped_column(Text, nullable=False)
