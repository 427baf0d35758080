"""
Password Hasher

Argon2id hashing tuned for interactive login latency.
"""

import secrets

from argon2 import PasswordHasher as Argon2Hasher
from argon2 import Type
from argon2.exceptions import InvalidHashError, VerificationError

# 19 MiB, 2 iterations, 1 lane
ARGON2_MEMORY_COST = 19456
ARGON2_TIME_COST = 2
ARGON2_PARALLELISM = 1


class PasswordHasher:
    """
    Hashes and verifies passwords with Argon2id.

    Business Rules:
    - verify() uses argon2's constant-time comparison
    - verify() never raises on malformed or foreign hashes, it returns False
    """

    def __init__(
        self,
        memory_cost: int = ARGON2_MEMORY_COST,
        time_cost: int = ARGON2_TIME_COST,
        parallelism: int = ARGON2_PARALLELISM,
    ):
        self._hasher = Argon2Hasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            type=Type.ID,
        )
        self._dummy_hash = None

    def hash(self, password: str) -> str:
        return self._hasher.hash(password)

    def verify(self, password_hash: str, password: str) -> bool:
        if not password_hash:
            return False
        try:
            return self._hasher.verify(password_hash, password)
        except (VerificationError, InvalidHashError, UnicodeEncodeError):
            # argon2 ascii-encodes the stored hash before parsing it
            return False

    def verify_dummy(self, password: str) -> bool:
        """Spend the work of one verify() when there is no stored hash; always False"""
        if self._dummy_hash is None:
            self._dummy_hash = self._hasher.hash(secrets.token_hex(16))
        self.verify(self._dummy_hash, password)
        return False

    def needs_rehash(self, password_hash: str) -> bool:
        """True if the hash was produced with different parameters"""
        try:
            return self._hasher.check_needs_rehash(password_hash)
        except (InvalidHashError, UnicodeEncodeError):
            return True
