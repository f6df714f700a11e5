from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.auth.models import AuthResult, UserView


class CredentialsIn(BaseModel):
    email: str = Field(min_length=5, max_length=100, examples=["user@example.com"])
    password: str = Field(min_length=8, max_length=50, examples=["SecurePass123!"])


class UserOut(BaseModel):
    """Public user info. The password hash is never part of this model."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    email: str
    role: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @classmethod
    def from_view(cls, view: UserView) -> UserOut:
        return cls(
            id=view.id,
            email=view.email,
            role=view.role,
            created_at=view.created_at,
            updated_at=view.updated_at,
        )


class AuthResponse(BaseModel):
    token: str
    user: UserOut

    @classmethod
    def from_result(cls, result: AuthResult) -> AuthResponse:
        return cls(token=result.token, user=UserOut.from_view(result.user))


class ScanResponse(BaseModel):
    text: str


class ErrorResponse(BaseModel):
    error: str
    error_code: str


class HealthCheckResponse(BaseModel):
    status: str


class HealthStatus(BaseModel):
    database: str
    server: str


class MetadataLinks(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    self_: str = Field(alias="self")
    privacy_policy: str = Field(alias="privacyPolicy")


class MetadataContact(BaseModel):
    name: str
    email: str
    url: str


class MetadataResponse(BaseModel):
    service: str
    version: str
    description: str
    status: str
    uptime: str
    health: HealthStatus
    documentation: str
    links: MetadataLinks
    contact: MetadataContact
    environment: str
