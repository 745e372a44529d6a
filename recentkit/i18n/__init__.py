"""Translations for the UI, keyed by dotted names such as ``prefs.purged_n``."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from loguru import logger

DEFAULT_LANGUAGE = "en_US"
SYSTEM_LANGUAGE = "system"
_SUPPORTED = ("en_US", "zh_CN")
_I18N_DIR = Path(__file__).parent

_current_lang: str = DEFAULT_LANGUAGE
_cache: dict[str, dict[str, str]] = {}


def _load(lang: str) -> dict[str, str]:
    if lang not in _cache:
        fp = _I18N_DIR / f"{lang}.json"
        try:
            with open(fp, "r", encoding="utf-8") as f:
                _cache[lang] = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"No translations for {lang}: {e}")
            _cache[lang] = {}
    return _cache[lang]


def match_language(tag: str) -> str | None:
    """Map a locale tag like ``zh-CN``, ``zh_cn`` or ``zh`` onto a supported language."""
    normalized = tag.strip().replace("-", "_")
    if not normalized:
        return None
    for lang in _SUPPORTED:
        if lang.lower() == normalized.lower():
            return lang
    base = normalized.split("_")[0].lower()
    for lang in _SUPPORTED:
        if lang.split("_")[0].lower() == base:
            return lang
    return None


def set_language(lang: str, system_locale: str = "") -> str:
    """Set the active language and return it.

    ``system`` follows *system_locale*; anything unsupported means en_US.
    """
    global _current_lang
    tag = system_locale if lang == SYSTEM_LANGUAGE else lang
    _current_lang = match_language(tag) or DEFAULT_LANGUAGE
    return _current_lang


def current_language() -> str:
    return _current_lang


def supported_languages() -> tuple[str, ...]:
    return _SUPPORTED


def t(key: str, **kwargs: Any) -> str:
    """Translate *key* to the current language.

    Missing keys fall back to en_US, then to the key itself. ``{name}``
    placeholders are filled from keyword arguments::

        t("prefs.purged_n", count=3)  # "Removed 3 inaccessible file(s)"
    """
    text = _load(_current_lang).get(key)
    if text is None:
        text = _load(DEFAULT_LANGUAGE).get(key, key)
    if kwargs:
        try:
            text = text.format(**kwargs)
        except (KeyError, IndexError):
            logger.debug(f"Missing placeholder value for {key!r}")
    return text
