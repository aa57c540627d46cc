"""bcrypt implementation of the password hashing port."""

import bcrypt

from employee_api.config import get_settings
from employee_api.services.interfaces import PasswordHasherInterface

ENCODING = "utf-8"


class PasswordService(PasswordHasherInterface):
    """Salted bcrypt hashing with a configurable cost factor."""

    DEFAULT_BCRYPT_ROUNDS = 12

    def __init__(self, rounds: int | None = None) -> None:
        self.rounds = rounds or self.DEFAULT_BCRYPT_ROUNDS

    def hash_password(self, password: str) -> str:
        """Hash a plain text password with a fresh salt.

        Args:
            password: Plain text password (at most 72 bytes are significant)

        Returns:
            bcrypt hash in modular crypt format ("$2b$...")
        """
        hashed = bcrypt.hashpw(password.encode(ENCODING), bcrypt.gensalt(rounds=self.rounds))
        return hashed.decode(ENCODING)

    def verify_password(self, password: str, hashed: str) -> bool:
        """Check a password against a stored hash.

        A malformed hash counts as a mismatch.
        """
        try:
            return bcrypt.checkpw(password.encode(ENCODING), hashed.encode(ENCODING))
        except (ValueError, UnicodeError):
            return False


_password_service: PasswordService | None = None


def get_password_service() -> PasswordService:
    """Get the shared PasswordService configured from settings."""
    global _password_service
    if _password_service is None:
        _password_service = PasswordService(rounds=get_settings().bcrypt_rounds)
    return _password_service
