"""
Password hashing and verification.

bcrypt with an embedded random salt and a configurable work factor; the
cost and salt travel inside the stored hash string.
"""

from __future__ import annotations

import bcrypt

DEFAULT_ROUNDS = 10


class PasswordHasher:
    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self.rounds = rounds

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time comparison against a bcrypt hash."""
        try:
            return bcrypt.checkpw(password.encode(), password_hash.encode())
        except (ValueError, TypeError):
            return False
