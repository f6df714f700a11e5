from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class UserRecord:
    """A stored user as the identity service sees it, independent of storage."""

    id: uuid.UUID | None
    email: str
    password_hash: str
    role: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class UserView:
    """Public projection of a user. Carries no credential material."""

    id: str
    email: str
    role: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, record: UserRecord) -> UserView:
        return cls(
            id=str(record.id),
            email=record.email,
            role=record.role,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


@dataclass(frozen=True)
class AuthResult:
    token: str
    user: UserView
