from __future__ import annotations

import asyncio
from functools import lru_cache

from werkzeug.security import check_password_hash, generate_password_hash

from app.core.errors import HashingFailure


@lru_cache(maxsize=None)
def _reference_digest(method: str, salt_length: int) -> str:
    return generate_password_hash("unused-reference-password", method=method, salt_length=salt_length)


class PasswordHasher:
    """Salted one-way password hashing.

    Digests are self-contained werkzeug method strings
    (``scrypt:32768:8:1$<salt>$<hash>``), so verification needs nothing but the
    digest itself. ``method`` is the cost knob: pass e.g.
    ``"pbkdf2:sha256:1000"`` in tests to keep them fast.
    """

    def __init__(self, method: str = "scrypt", salt_length: int = 16) -> None:
        self._method = method
        self._salt_length = salt_length

    def hash(self, plaintext: str) -> str:
        try:
            return generate_password_hash(plaintext, method=self._method, salt_length=self._salt_length)
        except (TypeError, ValueError) as exc:
            raise HashingFailure("failed to hash password", details=str(exc)) from exc

    def verify(self, plaintext: str, digest: str) -> bool:
        try:
            return check_password_hash(digest, plaintext)
        except ValueError:
            # Unknown method prefix: not a digest this hasher could have produced.
            return False
        except TypeError as exc:
            raise HashingFailure("failed to verify password", details=str(exc)) from exc

    def dummy_digest(self) -> str:
        """A digest with this hasher's cost, for verifying against when there
        is no stored digest (unknown account) so both paths take equal time."""
        try:
            return _reference_digest(self._method, self._salt_length)
        except (TypeError, ValueError) as exc:
            raise HashingFailure("failed to hash password", details=str(exc)) from exc

    # Hashing is deliberately slow; keep it off the event loop.
    async def hash_async(self, plaintext: str) -> str:
        return await asyncio.to_thread(self.hash, plaintext)

    async def verify_async(self, plaintext: str, digest: str) -> bool:
        return await asyncio.to_thread(self.verify, plaintext, digest)

    async def verify_dummy_async(self, plaintext: str) -> bool:
        return await asyncio.to_thread(lambda: self.verify(plaintext, self.dummy_digest()))
