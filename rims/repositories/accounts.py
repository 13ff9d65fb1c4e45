from rims.repositories.base import BaseRepository
from rims.schemas.account import Account
from rims.time_utils import utcnow_iso


class AccountRepository(BaseRepository[Account]):
    table_name = "users"
    model = Account

    def find_by_email(self, email: str) -> Account | None:
        return self.query_one(f"SELECT * FROM {self.table_name} WHERE LOWER(email) = LOWER(?)", [email])

    def update_sign_in(self, account_id: int, ip: str | None, signed_in_at: str | None = None) -> Account | None:
        """Bump the sign-in counter and stamp time/IP in one statement."""
        signed_in_at = signed_in_at or utcnow_iso()
        self.db.execute(
            f"UPDATE {self.table_name} SET "
            "sign_in_count = sign_in_count + 1, last_sign_in_at = ?, last_sign_in_ip = ?, updated_at = ? "
            "WHERE id = ?",
            [signed_in_at, ip, signed_in_at, account_id],
        )
        return self.get_by_id(account_id)

    def update_role(self, account_id: int, role: str) -> Account | None:
        self.db.execute(
            f"UPDATE {self.table_name} SET role = ?, updated_at = ? WHERE id = ?",
            [role, utcnow_iso(), account_id],
        )
        return self.get_by_id(account_id)

    def update_email(self, account_id: int, email: str) -> Account | None:
        self.db.execute(
            f"UPDATE {self.table_name} SET email = ?, updated_at = ? WHERE id = ?",
            [email, utcnow_iso(), account_id],
        )
        return self.get_by_id(account_id)

    def update_password(self, account_id: int, password_hash: str) -> Account | None:
        self.db.execute(
            f"UPDATE {self.table_name} SET password = ?, updated_at = ? WHERE id = ?",
            [password_hash, utcnow_iso(), account_id],
        )
        return self.get_by_id(account_id)

    def email_exists_for_other(self, email: str, exclude_id: int) -> bool:
        rows = self.db.query(
            f"SELECT id FROM {self.table_name} WHERE LOWER(email) = LOWER(?) AND id != ?",
            [email, exclude_id],
        )
        return len(rows) > 0

    def find_by_verification_token(self, token: str) -> Account | None:
        return self.query_one(f"SELECT * FROM {self.table_name} WHERE email_verification_token = ?", [token])

    def mark_email_verified(self, account_id: int) -> Account | None:
        self.db.execute(
            f"UPDATE {self.table_name} SET email_verified = 1, email_verification_token = NULL, "
            "email_verification_token_expires_at = NULL, updated_at = ? WHERE id = ?",
            [utcnow_iso(), account_id],
        )
        return self.get_by_id(account_id)

    def set_verification_token(self, account_id: int, token: str, expires_at: str) -> Account | None:
        self.db.execute(
            f"UPDATE {self.table_name} SET email_verification_token = ?, "
            "email_verification_token_expires_at = ?, updated_at = ? WHERE id = ?",
            [token, expires_at, utcnow_iso(), account_id],
        )
        return self.get_by_id(account_id)
