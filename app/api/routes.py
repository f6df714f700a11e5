from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_identity_service, get_scan_pipeline
from app.auth.service import IdentityService
from app.core.config import settings
from app.db.session import database_is_reachable, get_session
from app.pipeline.pipeline import ScanPipeline
from app.schemas import (
    AuthResponse,
    CredentialsIn,
    HealthCheckResponse,
    HealthStatus,
    MetadataContact,
    MetadataLinks,
    MetadataResponse,
    ScanResponse,
    UserOut,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def format_uptime(seconds: float) -> str:
    minutes = int(seconds // 60)
    return f"{minutes // 1440}d {(minutes // 60) % 24}h {minutes % 60}m"


@router.get("/", response_model=MetadataResponse)
async def metadata(
    request: Request,
    session: AsyncSession = Depends(get_session),
) -> MetadataResponse:
    app = request.app
    db_status = "ok" if await database_is_reachable(session) else "down"
    return MetadataResponse(
        service=settings.public_url,
        version=app.version,
        description=app.description,
        status="operational",
        uptime=format_uptime(time.monotonic() - app.state.started_at),
        health=HealthStatus(database=db_status, server="ok"),
        documentation="/docs",
        links=MetadataLinks(self_="/", privacy_policy="/api/terms_and_condition"),
        contact=MetadataContact(name="API Support", email="mail@achyutkoirala.com.np", url="/contact"),
        environment=settings.app_env,
    )


@router.get("/healthz", response_model=HealthCheckResponse)
async def healthz() -> HealthCheckResponse:
    return HealthCheckResponse(status="healthy")


@router.post("/users", response_model=AuthResponse)
async def signup(
    body: CredentialsIn,
    service: IdentityService = Depends(get_identity_service),
) -> AuthResponse:
    result = await service.signup(body.email, body.password)
    logger.info("signup_complete", extra={"user_id": result.user.id})
    return AuthResponse.from_result(result)


@router.post("/auth/login", response_model=AuthResponse)
async def login(
    body: CredentialsIn,
    service: IdentityService = Depends(get_identity_service),
) -> AuthResponse:
    result = await service.authenticate(body.email, body.password)
    return AuthResponse.from_result(result)


@router.get("/users/{user_id}", response_model=UserOut)
async def get_user(
    user_id: str,
    service: IdentityService = Depends(get_identity_service),
) -> UserOut:
    return UserOut.from_view(await service.get_user_by_id(user_id))


@router.post("/scan", response_model=ScanResponse)
async def scan(
    image: UploadFile | None = File(None, description="Image file for OCR scanning (e.g. JPEG, PNG)"),
    lang: str | None = Form(
        None,
        description="Tesseract code: eng, nep, hin or dev. Combine with '+', e.g. 'eng+hin'. Default 'eng'.",
    ),
    pipeline: ScanPipeline = Depends(get_scan_pipeline),
) -> ScanResponse:
    image_bytes = await image.read() if image is not None else b""
    logger.info("scan_received", extra={"upload_filename": image.filename if image is not None else None})
    text = await pipeline.run(image_bytes, lang)
    return ScanResponse(text=text)
