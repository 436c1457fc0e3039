from __future__ import annotations

import time
import uuid
from typing import Any

import bcrypt

_users: dict[str, dict[str, Any]] = {}


class DuplicateUserError(ValueError):
    """An account with this email address already exists."""


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _public(record: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": record["id"],
        "emailAddress": record["email"],
        "firstName": record["first_name"],
        "lastName": record["last_name"],
        "phoneNumber": record["phone_number"],
        "createdAt": record["created_at"],
    }


def create_user(
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    phone_number: str | None = None,
    user_id: str | None = None,
) -> dict[str, Any]:
    """Register a new account and return its public profile."""
    key = email.strip().lower()
    if key in _users:
        raise DuplicateUserError(f"{email} is already registered")

    record = {
        "id": user_id or f"user_{uuid.uuid4().hex}",
        "email": email.strip(),
        "password_hash": _hash_password(password),
        "first_name": first_name,
        "last_name": last_name,
        "phone_number": phone_number,
        "created_at": int(time.time() * 1000),
    }
    _users[key] = record
    return _public(record)


def authenticate(email: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns the public profile or ``None``."""
    record = _users.get(email.strip().lower())
    if record and _verify_password(password, record["password_hash"]):
        return _public(record)
    return None


def get_user(user_id: str) -> dict[str, Any] | None:
    for record in _users.values():
        if record["id"] == user_id:
            return _public(record)
    return None


def _seed_users() -> None:
    """Pre-seed accounts for the demo interaction data on import."""
    for n in range(1, 5):
        create_user(
            f"user{n}@example.com", "password123", "Demo", f"User {n}", user_id=f"user_{n}",
        )


_seed_users()
