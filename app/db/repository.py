"""User persistence port and its SQLAlchemy adapter.

``UserDirectory`` is what the identity service depends on. Failures are
signalled by exception type, never by message text:

    UserNotFoundError   no row for the given id/email
    DuplicateUserError  the unique email index rejected an insert
    UserDirectoryError  anything else the backend raised, including driver
                        connection errors SQLAlchemy does not wrap
"""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.models import UserRecord
from app.db.models import User

logger = logging.getLogger(__name__)


class UserDirectoryError(Exception):
    pass


class UserNotFoundError(UserDirectoryError):
    pass


class DuplicateUserError(UserDirectoryError):
    pass


class UserDirectory:
    async def create_user(self, record: UserRecord) -> UserRecord:
        raise NotImplementedError

    async def get_by_id(self, user_id: uuid.UUID) -> UserRecord:
        raise NotImplementedError

    async def get_by_email(self, email: str) -> UserRecord:
        raise NotImplementedError


def _to_record(row: User) -> UserRecord:
    return UserRecord(
        id=row.id,
        email=row.email,
        password_hash=row.password_hash,
        role=row.role,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlUserDirectory(UserDirectory):
    """UserDirectory backed by an async SQLAlchemy session (one per request)."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_user(self, record: UserRecord) -> UserRecord:
        row = User(
            id=record.id or uuid.uuid4(),
            email=record.email,
            password_hash=record.password_hash,
            role=record.role,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
        self._session.add(row)
        try:
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            raise DuplicateUserError(f"user with email {record.email!r} already exists") from exc
        except (SQLAlchemyError, OSError) as exc:
            await self._session.rollback()
            raise UserDirectoryError("failed to create user") from exc

        logger.info("user_row_created", extra={"user_id": str(row.id)})
        return _to_record(row)

    async def get_by_id(self, user_id: uuid.UUID) -> UserRecord:
        return await self._fetch_one(User.id == user_id, f"user {user_id} not found")

    async def get_by_email(self, email: str) -> UserRecord:
        return await self._fetch_one(User.email == email, f"user with email {email!r} not found")

    async def _fetch_one(self, criterion, not_found_message: str) -> UserRecord:
        try:
            result = await self._session.execute(select(User).where(criterion))
            row = result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as exc:
            raise UserDirectoryError("failed to query users") from exc
        if row is None:
            raise UserNotFoundError(not_found_message)
        return _to_record(row)
