from __future__ import annotations

import uuid
from typing import Any

import bcrypt

from ..listings.models import UserRole

DEFAULT_BCRYPT_ROUNDS = 12


class RegistrationError(Exception):
    """An account with this email already exists."""


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class IdentityProvider:
    """Email/password accounts for tenants and owners."""

    def __init__(self, bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self._rounds = bcrypt_rounds
        self._accounts: dict[str, dict[str, Any]] = {}

    def _hash_password(self, plain: str) -> str:
        return bcrypt.hashpw(plain.encode(), bcrypt.gensalt(rounds=self._rounds)).decode()

    @staticmethod
    def _verify_password(plain: str, hashed: str) -> bool:
        return bcrypt.checkpw(plain.encode(), hashed.encode())

    @staticmethod
    def _public(record: dict[str, Any]) -> dict[str, Any]:
        return {
            "id": record["id"],
            "email": record["email"],
            "role": record["role"],
            "name": record["name"],
        }

    def register(
        self,
        email: str,
        password: str,
        role: UserRole,
        name: str | None = None,
    ) -> dict[str, Any]:
        """Create an account. Returns ``{id, email, role, name}``."""
        key = _normalize_email(email)
        if key in self._accounts:
            raise RegistrationError(f"{key} is already registered")
        record = {
            "id": str(uuid.uuid4()),
            "email": key,
            "role": UserRole(role).value,
            "name": name or key.split("@")[0],
            "password_hash": self._hash_password(password),
        }
        self._accounts[key] = record
        return self._public(record)

    def authenticate(self, email: str, password: str) -> dict[str, Any] | None:
        """Verify credentials. Returns ``{id, email, role, name}`` or ``None``."""
        record = self._accounts.get(_normalize_email(email))
        if record and self._verify_password(password, record["password_hash"]):
            return self._public(record)
        return None

    def get(self, user_id: str) -> dict[str, Any] | None:
        for record in self._accounts.values():
            if record["id"] == user_id:
                return self._public(record)
        return None
