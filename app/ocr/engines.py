"""TesseractOCREngine: local OCR through the tesseract binary (pytesseract)."""
from __future__ import annotations

import asyncio
import io
import logging

import pytesseract
from PIL import Image, UnidentifiedImageError

from app.ocr.base_ocr import OCREngine, OCREngineError

logger = logging.getLogger(__name__)


class TesseractOCREngine(OCREngine):
    """OCR engine backed by Tesseract.

    Requires the ``tesseract`` binary plus the traineddata for every language
    that may be requested (``eng``, ``nep``, ``hin``; ``dev`` is the
    Devanagari script model).

    Cancelling the awaiting request does not stop a worker thread that has
    already started, so the tesseract subprocess is bounded by ``timeout``
    instead: pytesseract kills it once the limit passes.

    Config (via .env):
        OCR_PROVIDER=tesseract
        TESSERACT_CONFIG=--oem 3 --psm 3
        TESSERACT_TIMEOUT=30
    """

    def __init__(self, config: str = "--oem 3 --psm 3", timeout: float = 30.0) -> None:
        self._config = config
        self._timeout = timeout

    async def extract_text(self, image_bytes: bytes, language: str) -> str:
        """Run Tesseract on *image_bytes* in a worker thread."""
        if not image_bytes:
            raise OCREngineError("empty image data provided")

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._run_tesseract, image_bytes, language)

    def _run_tesseract(self, image_bytes: bytes, language: str) -> str:
        try:
            img = Image.open(io.BytesIO(image_bytes))
            img.load()
        except (UnidentifiedImageError, OSError) as exc:
            logger.error("tesseract_image_decode_failed", extra={"error": str(exc)})
            raise OCREngineError("failed to prepare image for OCR processing") from exc

        try:
            text = pytesseract.image_to_string(
                img, lang=language, config=self._config, timeout=self._timeout
            )
        except pytesseract.TesseractError as exc:
            logger.error("tesseract_failed", extra={"language": language, "error": str(exc)})
            if "load" in str(exc).lower() and "language" in str(exc).lower():
                raise OCREngineError(
                    f"unsupported OCR language or missing language data for {language!r}"
                ) from exc
            raise OCREngineError("failed to extract text from image") from exc
        except pytesseract.TesseractNotFoundError as exc:
            logger.error("tesseract_not_installed")
            raise OCREngineError("OCR engine not available") from exc
        except RuntimeError as exc:
            # pytesseract signals a killed subprocess with a bare RuntimeError.
            logger.error("tesseract_timeout", extra={"language": language, "timeout": self._timeout})
            raise OCREngineError("OCR timed out") from exc

        logger.info("tesseract_complete", extra={"language": language, "chars": len(text)})
        return text
