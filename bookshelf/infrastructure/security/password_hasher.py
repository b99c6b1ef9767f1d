"""
Salted PBKDF2 password hashing.

Secrets are encoded as ``pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>``
so the iteration count can be raised later without invalidating stored
secrets.
"""

import hashlib
import hmac
import secrets

from bookshelf.domain.ports import PasswordHasher

ALGORITHM = "pbkdf2_sha256"
DEFAULT_ITERATIONS = 600_000
SALT_BYTES = 16


class Pbkdf2PasswordHasher(PasswordHasher):
    """PBKDF2-HMAC-SHA256 with a random per-password salt."""

    def __init__(self, iterations: int = DEFAULT_ITERATIONS) -> None:
        if iterations < 1:
            raise ValueError(f"iterations must be >= 1, got {iterations}")
        self._iterations = iterations

    def hash(self, password: str) -> str:
        salt = secrets.token_bytes(SALT_BYTES)
        digest = self._derive(password, salt, self._iterations)
        return f"{ALGORITHM}${self._iterations}${salt.hex()}${digest.hex()}"

    def verify(self, password: str, secret: str) -> bool:
        """
        Check a password against an encoded secret.

        Malformed secrets never verify. The digest comparison runs in
        constant time.
        """
        try:
            algorithm, iterations, salt_hex, digest_hex = secret.split("$")
            rounds = int(iterations)
            salt = bytes.fromhex(salt_hex)
            expected = bytes.fromhex(digest_hex)
        except ValueError:
            return False

        if algorithm != ALGORITHM or rounds < 1:
            return False

        candidate = self._derive(password, salt, rounds)
        return hmac.compare_digest(candidate, expected)

    @staticmethod
    def _derive(password: str, salt: bytes, iterations: int) -> bytes:
        return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
