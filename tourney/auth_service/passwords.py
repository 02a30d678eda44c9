"""
Password hashing with Argon2id.

Each hash carries its own random salt and cost parameters, so the same
password hashes differently every time and old hashes keep verifying after
the work factor is raised.
"""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError


class PasswordService:
    """
    Wraps argon2's PasswordHasher with a configurable work factor.

    Args:
        time_cost (int): Number of iterations.
        memory_cost (int): Memory usage in KiB.
        parallelism (int): Number of parallel lanes.
    """

    def __init__(self, time_cost: int = 3, memory_cost: int = 65536, parallelism: int = 4):
        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
        )
        self._dummy_hash = None

    def hash(self, password: str) -> str:
        return self._hasher.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Check a plaintext password against a stored hash.

        Returns False (never raises) on a mismatch or a malformed hash.
        """
        if not isinstance(password_hash, str) or not isinstance(password, str):
            return False
        try:
            return self._hasher.verify(password_hash, password)
        except (VerificationError, InvalidHashError, ValueError):
            return False

    def burn(self, password: str) -> None:
        """
        Spend one verification worth of CPU without a real hash.

        Used when the account does not exist so that unknown emails and wrong
        passwords take about the same time to reject.
        """
        if self._dummy_hash is None:
            self._dummy_hash = self._hasher.hash("not-a-real-password")
        self.verify(password, self._dummy_hash)
