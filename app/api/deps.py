"""FastAPI dependency wiring for the identity and scan services."""
from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.passwords import PasswordHasher
from app.auth.service import IdentityService
from app.auth.tokens import TokenIssuer
from app.core.config import settings
from app.db.repository import SqlUserDirectory, UserDirectory
from app.db.session import get_session
from app.ocr.base_ocr import OCREngine
from app.ocr.factory import get_ocr_engine
from app.pipeline.pipeline import ScanPipeline


def get_user_directory(session: AsyncSession = Depends(get_session)) -> UserDirectory:
    return SqlUserDirectory(session)


def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(method=settings.password_hash_method)


def get_token_issuer() -> TokenIssuer:
    return TokenIssuer(
        settings.jwt_secret,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
    )


def get_identity_service(
    directory: UserDirectory = Depends(get_user_directory),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> IdentityService:
    return IdentityService(directory, hasher, tokens)


def get_scan_pipeline(ocr_engine: OCREngine = Depends(get_ocr_engine)) -> ScanPipeline:
    return ScanPipeline(ocr_engine)
