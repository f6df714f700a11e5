from __future__ import annotations

from app.ocr.base_ocr import OCREngine, OCREngineError


class MockOCREngine(OCREngine):
    async def extract_text(self, image_bytes: bytes, language: str) -> str:
        # Mock OCR for development/testing
        if not image_bytes:
            raise OCREngineError("empty image data provided")
        return f"Sample scanned text\nLanguage: {language}\nNiyam API"
