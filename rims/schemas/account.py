from pydantic import Field

from rims.schemas.base import CamelModel


class Account(CamelModel):
    id: int
    email: str
    password: str = Field(repr=False)
    role: str = "user"
    sign_in_count: int = 0
    last_sign_in_at: str | None = None
    last_sign_in_ip: str | None = None
    email_verified: bool = False
    email_verification_token: str | None = Field(default=None, repr=False)
    email_verification_token_expires_at: str | None = None
    created_at: str
    updated_at: str



class AccountOut(CamelModel):
    """Account without the password hash or verification token."""

    id: int
    email: str
    role: str
    sign_in_count: int = 0
    last_sign_in_at: str | None = None
    last_sign_in_ip: str | None = None
    email_verified: bool = False
    created_at: str
    updated_at: str
