from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from rims.database import Base


class BOMRecord(Base):
    __tablename__ = "boms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, server_default="")

    # Lines as JSON, e.g. '[{"itemId": 7, "quantity": 2, "notes": ""}]'
    items: Mapped[str] = mapped_column(Text, nullable=False, server_default="[]")

    created_at: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[str] = mapped_column(Text, nullable=False)
