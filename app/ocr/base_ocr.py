from __future__ import annotations


class OCREngineError(Exception):
    """Raised by engines when text could not be extracted."""


class OCREngine:
    async def extract_text(self, image_bytes: bytes, language: str) -> str:
        """Return the text found in *image_bytes*.

        *language* is a ``+``-joined spec such as ``"eng+hin"``.
        """
        raise NotImplementedError
