from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from rims.database import Base


class ItemTemplateRecord(Base):
    __tablename__ = "item_templates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(Text, nullable=False)

    # Partial item attributes as JSON, e.g. '{"vendorName": "Adafruit", "reorderPoint": 3}'
    default_fields: Mapped[str] = mapped_column(Text, nullable=False, server_default="{}")

    created_at: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[str] = mapped_column(Text, nullable=False)
