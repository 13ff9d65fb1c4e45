from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from rims.database import Base


class AppMetadata(Base):
    """Key/value rows: ``schema_version`` and per-table id high-water marks."""

    __tablename__ = "app_metadata"

    key: Mapped[str] = mapped_column(Text, primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
