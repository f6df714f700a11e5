"""Identity service: signup, login and user lookup.

Signup runs LookupExisting -> (Found: reject) | (NotFound: Hash -> Persist ->
IssueToken). Login deliberately collapses "unknown email" and "wrong password"
into one AuthenticationFailure so callers cannot tell whether an account exists.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from app.auth.models import AuthResult, UserRecord, UserView
from app.auth.passwords import PasswordHasher
from app.auth.tokens import TokenIssuer
from app.core.errors import (
    AuthenticationFailure,
    ConflictError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from app.db.repository import DuplicateUserError, UserDirectory, UserDirectoryError, UserNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "user"


class IdentityService:
    def __init__(self, directory: UserDirectory, hasher: PasswordHasher, tokens: TokenIssuer) -> None:
        self._directory = directory
        self._hasher = hasher
        self._tokens = tokens

    # ------------------------------------------------------------------ #
    #  Signup                                                              #
    # ------------------------------------------------------------------ #

    async def signup(self, email: str, password: str) -> AuthResult:
        try:
            await self._directory.get_by_email(email)
        except UserNotFoundError:
            pass
        except UserDirectoryError as exc:
            logger.exception("signup_lookup_failed", extra={"email": email})
            raise PersistenceError("failed to check existing user", details=str(exc)) from exc
        else:
            logger.info("signup_rejected_duplicate", extra={"email": email})
            raise ConflictError("user with this email already exists")

        password_hash = await self._hasher.hash_async(password)

        now = datetime.now(timezone.utc)
        record = UserRecord(
            id=None,
            email=email,
            password_hash=password_hash,
            role=DEFAULT_ROLE,
            created_at=now,
            updated_at=now,
        )

        try:
            created = await self._directory.create_user(record)
        except DuplicateUserError as exc:
            # Another request registered the same email between lookup and insert.
            logger.info("signup_rejected_duplicate", extra={"email": email, "stage": "persist"})
            raise ConflictError("user with this email already exists") from exc
        except UserDirectoryError as exc:
            logger.exception("signup_persist_failed", extra={"email": email})
            raise PersistenceError("failed to create user", details=str(exc)) from exc

        token = self._tokens.issue(created)
        logger.info("user_created", extra={"user_id": str(created.id)})
        return AuthResult(token=token, user=UserView.from_record(created))

    # ------------------------------------------------------------------ #
    #  Login                                                               #
    # ------------------------------------------------------------------ #

    async def authenticate(self, email: str, password: str) -> AuthResult:
        try:
            user = await self._directory.get_by_email(email)
        except UserNotFoundError as exc:
            # Same hashing cost as a wrong password.
            await self._hasher.verify_dummy_async(password)
            logger.info("login_failed", extra={"email": email, "reason": "unknown_email"})
            raise AuthenticationFailure(details=str(exc)) from exc
        except UserDirectoryError as exc:
            logger.warning("login_failed", extra={"email": email, "reason": type(exc).__name__})
            raise AuthenticationFailure(details=str(exc)) from exc
        except Exception as exc:
            logger.exception("login_lookup_crashed", extra={"email": email})
            raise AuthenticationFailure(details=repr(exc)) from exc

        if not await self._hasher.verify_async(password, user.password_hash):
            logger.info("login_failed", extra={"email": email, "reason": "password_mismatch"})
            raise AuthenticationFailure(details="password mismatch")

        token = self._tokens.issue(user)
        logger.info("login_succeeded", extra={"user_id": str(user.id)})
        return AuthResult(token=token, user=UserView.from_record(user))

    # ------------------------------------------------------------------ #
    #  Lookup                                                              #
    # ------------------------------------------------------------------ #

    async def get_user_by_id(self, raw_id: str) -> UserView:
        try:
            user_id = uuid.UUID(raw_id)
        except (TypeError, ValueError) as exc:
            raise ValidationError("invalid user ID format") from exc

        try:
            user = await self._directory.get_by_id(user_id)
        except UserNotFoundError as exc:
            raise NotFoundError("user not found") from exc
        except UserDirectoryError as exc:
            logger.exception("user_lookup_failed", extra={"user_id": raw_id})
            raise PersistenceError("failed to retrieve user", details=str(exc)) from exc

        return UserView.from_record(user)
