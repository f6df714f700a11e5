"""Scan pipeline: image bytes → language normalization → OCR → text.

Failures come out as one of three categories:
- MissingInputError: no image bytes (the engine is never called)
- UnsupportedLanguageError: the language hint named unknown codes
- ExtractionError: anything the OCR engine raised, chained for diagnostics

There is no retry and no automatic fallback to another language set.
"""
from __future__ import annotations

import logging
import time

from app.core.errors import ExtractionError, MissingInputError
from app.ocr.base_ocr import OCREngine
from app.ocr.languages import DEFAULT_LANGUAGE, normalize_languages

logger = logging.getLogger(__name__)


class ScanPipeline:
    def __init__(self, ocr_engine: OCREngine) -> None:
        self._ocr_engine = ocr_engine

    async def run(self, image_bytes: bytes | None, language: str | None = None) -> str:
        if not image_bytes:
            raise MissingInputError(
                "No image file provided. Please upload a file with the 'image' field."
            )

        language_spec = normalize_languages(language or DEFAULT_LANGUAGE)
        logger.info("ocr_language_finalized", extra={"language": language_spec})

        t0 = time.monotonic()
        try:
            text = await self._ocr_engine.extract_text(image_bytes, language_spec)
        except Exception as exc:
            logger.exception(
                "ocr_failed",
                extra={"language": language_spec, "bytes": len(image_bytes)},
            )
            raise ExtractionError("Failed to process image for OCR", details=str(exc)) from exc

        logger.info(
            "ocr_complete",
            extra={
                "language": language_spec,
                "chars": len(text),
                "duration_ms": int((time.monotonic() - t0) * 1000),
            },
        )
        return text
