from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from rims.database import Base


class AccountRecord(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    password: Mapped[str] = mapped_column(Text, nullable=False)  # bcrypt hash
    role: Mapped[str] = mapped_column(String, nullable=False, server_default="user")  # admin, user
    sign_in_count: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    last_sign_in_at: Mapped[str | None] = mapped_column(Text)
    last_sign_in_ip: Mapped[str | None] = mapped_column(Text)
    email_verified: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    email_verification_token: Mapped[str | None] = mapped_column(Text)
    email_verification_token_expires_at: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[str] = mapped_column(Text, nullable=False)
