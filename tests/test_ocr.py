"""OCR engine tests: fully mocked, no tesseract binary required."""
from __future__ import annotations

import io
from unittest.mock import patch

import pytest
import pytesseract
from PIL import Image

from app.ocr.base_ocr import OCREngine, OCREngineError
from app.ocr.engines import TesseractOCREngine
from app.ocr.mock_ocr import MockOCREngine


def _png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (40, 20), "white").save(buf, format="PNG")
    return buf.getvalue()


# ---------------------------------------------------------------------------
# Base OCREngine
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_base_ocr_raises_not_implemented() -> None:
    engine = OCREngine()
    with pytest.raises(NotImplementedError):
        await engine.extract_text(b"fake bytes", "eng")


# ---------------------------------------------------------------------------
# MockOCREngine
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_mock_ocr_returns_text() -> None:
    engine = MockOCREngine()
    text = await engine.extract_text(b"any bytes", "eng+hin")
    assert isinstance(text, str)
    assert "eng+hin" in text


@pytest.mark.asyncio
async def test_mock_ocr_rejects_empty_input() -> None:
    with pytest.raises(OCREngineError):
        await MockOCREngine().extract_text(b"", "eng")


# ---------------------------------------------------------------------------
# TesseractOCREngine (pytesseract patched)
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_tesseract_passes_language_spec_through() -> None:
    engine = TesseractOCREngine(config="--psm 6")
    with patch("app.ocr.engines.pytesseract.image_to_string", return_value="नमस्ते hello") as mocked:
        text = await engine.extract_text(_png_bytes(), "eng+hin")

    assert text == "नमस्ते hello"
    _, kwargs = mocked.call_args
    assert kwargs["lang"] == "eng+hin"
    assert kwargs["config"] == "--psm 6"


@pytest.mark.asyncio
async def test_tesseract_rejects_empty_input() -> None:
    with patch("app.ocr.engines.pytesseract.image_to_string") as mocked:
        with pytest.raises(OCREngineError, match="empty image"):
            await TesseractOCREngine().extract_text(b"", "eng")
    mocked.assert_not_called()


@pytest.mark.asyncio
async def test_tesseract_rejects_undecodable_image() -> None:
    with pytest.raises(OCREngineError, match="prepare image"):
        await TesseractOCREngine().extract_text(b"definitely not an image", "eng")


@pytest.mark.asyncio
async def test_tesseract_missing_language_data() -> None:
    error = pytesseract.TesseractError(1, "Failed loading language 'nep'")
    with patch("app.ocr.engines.pytesseract.image_to_string", side_effect=error):
        with pytest.raises(OCREngineError, match="missing language data"):
            await TesseractOCREngine().extract_text(_png_bytes(), "nep")


@pytest.mark.asyncio
async def test_tesseract_bounds_subprocess_with_timeout() -> None:
    engine = TesseractOCREngine(timeout=12.5)
    with patch("app.ocr.engines.pytesseract.image_to_string", return_value="ok") as mocked:
        await engine.extract_text(_png_bytes(), "eng")

    _, kwargs = mocked.call_args
    assert kwargs["timeout"] == 12.5


@pytest.mark.asyncio
async def test_tesseract_timeout_is_engine_error() -> None:
    with patch(
        "app.ocr.engines.pytesseract.image_to_string",
        side_effect=RuntimeError("Tesseract process timeout"),
    ):
        with pytest.raises(OCREngineError, match="OCR timed out"):
            await TesseractOCREngine(timeout=1).extract_text(_png_bytes(), "eng")


@pytest.mark.asyncio
async def test_tesseract_generic_failure() -> None:
    error = pytesseract.TesseractError(1, "segfault")
    with patch("app.ocr.engines.pytesseract.image_to_string", side_effect=error):
        with pytest.raises(OCREngineError, match="failed to extract text"):
            await TesseractOCREngine().extract_text(_png_bytes(), "eng")


# ---------------------------------------------------------------------------
# OCR Factory
# ---------------------------------------------------------------------------

def test_ocr_factory_returns_mock() -> None:
    import os
    os.environ["OCR_PROVIDER"] = "mock"

    # Reload settings with the new env var
    from importlib import reload
    import app.core.config as cfg_module
    import app.ocr.factory as factory_module
    reload(cfg_module)
    reload(factory_module)

    assert isinstance(factory_module.get_ocr_engine(), MockOCREngine)


def test_ocr_factory_returns_tesseract() -> None:
    import os
    os.environ["OCR_PROVIDER"] = "tesseract"

    from importlib import reload
    import app.core.config as cfg_module
    import app.ocr.factory as factory_module
    reload(cfg_module)
    reload(factory_module)

    try:
        engine = factory_module.get_ocr_engine()
        assert isinstance(engine, TesseractOCREngine)
        assert engine._timeout == cfg_module.settings.tesseract_timeout
    finally:
        os.environ["OCR_PROVIDER"] = "mock"
        reload(cfg_module)
        reload(factory_module)


def test_ocr_factory_raises_on_unknown_provider() -> None:
    import os
    os.environ["OCR_PROVIDER"] = "unknown_engine"

    from importlib import reload
    import app.core.config as cfg_module
    import app.ocr.factory as factory_module
    reload(cfg_module)
    reload(factory_module)

    try:
        with pytest.raises(ValueError, match="Unknown OCR_PROVIDER"):
            factory_module.get_ocr_engine()
    finally:
        os.environ["OCR_PROVIDER"] = "mock"
        reload(cfg_module)
        reload(factory_module)
