from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_env: str = "development"
    log_level: str = "INFO"
    public_url: str = "http://localhost:8080"
    host: str = "0.0.0.0"
    port: int = 8080

    database_url: str

    # Token signing
    jwt_secret: str = Field(min_length=1)
    jwt_issuer: str = "niyam-api"
    jwt_audience: str = "users"

    # werkzeug method string: scrypt | pbkdf2:sha256:<iterations>
    password_hash_method: str = "scrypt"

    # OCR provider: tesseract | mock
    ocr_provider: str = "tesseract"
    tesseract_config: str = "--oem 3 --psm 3"
    # Seconds before the tesseract subprocess is killed; 0 disables the limit.
    tesseract_timeout: float = 30.0


settings = Settings()
