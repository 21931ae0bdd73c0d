"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from staffdesk.domain.users.repositories import PasswordHasher

DEFAULT_METHOD = "scrypt"


class WerkzeugPasswordHasher(PasswordHasher):
    """Salted slow hashing; ``method`` carries the work factor, e.g. ``pbkdf2:sha256:600000``."""

    def __init__(self, method: str = DEFAULT_METHOD, salt_length: int = 16) -> None:
        self._method = method
        self._salt_length = salt_length

    def hash(self, password: str, method: str | None = None) -> str:
        return str(
            generate_password_hash(
                password, method=method or self._method, salt_length=self._salt_length
            )
        )

    def verify(self, password: str, hashed: str) -> bool:
        return bool(check_password_hash(hashed, password))
