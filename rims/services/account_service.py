import secrets
from datetime import timedelta

import bcrypt

from rims.config import settings
from rims.repositories.registry import Repositories
from rims.schemas.account import Account, AccountOut
from rims.time_utils import parse_iso, to_iso, utcnow, utcnow_iso

ROLES = ("admin", "user")


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def is_password_hash(value: str) -> bool:
    return value.startswith(("$2a$", "$2b$", "$2y$")) and len(value) == 60


def verify_password(password: str, hashed: str) -> bool:
    if not is_password_hash(hashed):
        return False
    return bcrypt.checkpw(password.encode(), hashed.encode())


def create_account(
    repos: Repositories, email: str, password: str, role: str = "user", email_verified: bool = False
) -> Account:
    if role not in ROLES:
        raise ValueError(f"Unknown role '{role}'")
    if repos.accounts.find_by_email(email):
        raise ValueError(f"Email '{email}' is already registered")
    now = utcnow_iso()
    return repos.accounts.create(
        {
            "email": email,
            "password": hash_password(password),
            "role": role,
            "signInCount": 0,
            "emailVerified": email_verified,
            "createdAt": now,
            "updatedAt": now,
        }
    )


def list_accounts(repos: Repositories) -> list[AccountOut]:
    return [AccountOut.model_validate(account) for account in repos.accounts.get_all()]


def get_account(repos: Repositories, account_id: int) -> AccountOut | None:
    account = repos.accounts.get_by_id(account_id)
    return AccountOut.model_validate(account) if account else None


def delete_account(repos: Repositories, account_id: int, current_account_id: int) -> bool:
    if account_id == current_account_id:
        raise ValueError("Can't delete yourself.")
    return repos.accounts.delete(account_id)


def authenticate(repos: Repositories, email: str, password: str, ip: str | None = None) -> Account | None:
    """Check credentials; a match records the sign-in and returns the updated account."""
    account = repos.accounts.find_by_email(email)
    if not account or not verify_password(password, account.password):
        return None
    return repos.accounts.update_sign_in(account.id, ip)


def change_email(repos: Repositories, account_id: int, email: str) -> Account | None:
    if repos.accounts.email_exists_for_other(email, account_id):
        raise ValueError(f"Email '{email}' is already registered")
    return repos.accounts.update_email(account_id, email)


def change_password(repos: Repositories, account_id: int, password: str) -> Account | None:
    return repos.accounts.update_password(account_id, hash_password(password))


def change_role(repos: Repositories, account_id: int, role: str) -> Account | None:
    if role not in ROLES:
        raise ValueError(f"Unknown role '{role}'")
    return repos.accounts.update_role(account_id, role)


def issue_verification_token(repos: Repositories, account_id: int) -> str | None:
    if repos.accounts.get_by_id(account_id) is None:
        return None
    token = secrets.token_urlsafe(32)
    expires_at = to_iso(utcnow() + timedelta(hours=settings.EMAIL_VERIFICATION_TOKEN_HOURS))
    repos.accounts.set_verification_token(account_id, token, expires_at)
    return token


def verify_email(repos: Repositories, token: str) -> Account | None:
    """Consume a verification token. Unknown or expired tokens return None."""
    account = repos.accounts.find_by_verification_token(token)
    if account is None:
        return None
    expires_at = account.email_verification_token_expires_at
    if expires_at and parse_iso(expires_at) < utcnow():
        return None
    return repos.accounts.mark_email_verified(account.id)
