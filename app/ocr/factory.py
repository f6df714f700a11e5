from __future__ import annotations

from app.core.config import settings
from app.ocr.base_ocr import OCREngine
from app.ocr.mock_ocr import MockOCREngine


def get_ocr_engine() -> OCREngine:
    """Return the configured OCR engine instance.

    OCR_PROVIDER options:
        tesseract: TesseractOCREngine (pytesseract + tesseract binary)
        mock:      synthetic text (dev/test, no binary required)
    """
    provider = settings.ocr_provider.lower().strip()

    if provider == "mock":
        return MockOCREngine()

    if provider == "tesseract":
        from app.ocr.engines import TesseractOCREngine
        return TesseractOCREngine(config=settings.tesseract_config, timeout=settings.tesseract_timeout)

    raise ValueError(f"Unknown OCR_PROVIDER={settings.ocr_provider!r}")
