"""Language hint parsing for OCR requests.

A hint like ``"eng+hin"`` or ``"eng, nep"`` becomes the ``+``-joined spec
Tesseract expects. Order is kept and repeated codes are not collapsed.
"""
from __future__ import annotations

import logging

from app.core.errors import UnsupportedLanguageError

logger = logging.getLogger(__name__)

LANG_ENGLISH = "eng"
LANG_NEPALI = "nep"
LANG_HINDI = "hin"
LANG_DEVANAGARI = "dev"  # script, not a language

SUPPORTED_LANGUAGES: frozenset[str] = frozenset({LANG_ENGLISH, LANG_NEPALI, LANG_HINDI, LANG_DEVANAGARI})
DEFAULT_LANGUAGE = LANG_ENGLISH


def sorted_supported_languages() -> list[str]:
    return sorted(SUPPORTED_LANGUAGES)


def parse_language_codes(raw: str | None) -> list[str]:
    """Split *raw* on ``+`` (preferred) or ``,`` and drop blank parts."""
    if not raw:
        return []
    if "+" in raw:
        parts = raw.split("+")
    elif "," in raw:
        parts = raw.split(",")
    else:
        parts = [raw]
    return [p.strip() for p in parts if p.strip()]


def normalize_languages(raw: str | None) -> str:
    """Validate a language hint and return the joined spec.

    Raises:
        UnsupportedLanguageError: naming every unrecognised code.
    """
    valid: list[str] = []
    invalid: list[str] = []
    for code in parse_language_codes(raw):
        (valid if code in SUPPORTED_LANGUAGES else invalid).append(code)

    if invalid:
        supported = sorted_supported_languages()
        message = "Unsupported language code(s) found: '{}'. Supported codes are: {}.".format(
            "', '".join(invalid), ", ".join(supported)
        )
        logger.info("ocr_language_rejected", extra={"invalid_codes": ",".join(invalid)})
        raise UnsupportedLanguageError(message, invalid_codes=invalid, supported_codes=supported)

    if not valid:
        logger.info("ocr_language_defaulted", extra={"raw": raw, "language": DEFAULT_LANGUAGE})
        valid = [DEFAULT_LANGUAGE]

    return "+".join(valid)
