"""Tests for the translation helpers."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from recentkit import i18n
from recentkit.i18n import set_language, t


@pytest.fixture(autouse=True)
def restore_language():
    yield
    set_language("en_US")


def test_placeholders() -> None:
    set_language("en_US")
    assert t("prefs.purged_n", count=3) == "Removed 3 inaccessible file(s)"


def test_unsupported_language_falls_back() -> None:
    set_language("xx_XX")
    assert i18n.current_language() == "en_US"
    assert t("nav.home") == "Home"


def test_unknown_key_returns_key() -> None:
    assert t("no.such.key") == "no.such.key"


def test_translations_cover_same_keys() -> None:
    folder = Path(i18n.__file__).parent
    en = json.loads((folder / "en_US.json").read_text(encoding="utf-8"))
    zh = json.loads((folder / "zh_CN.json").read_text(encoding="utf-8"))
    assert set(en) == set(zh)


@pytest.mark.parametrize(
    ("tag", "expected"),
    [("zh_CN", "zh_CN"), ("zh-cn", "zh_CN"), ("zh_TW", "zh_CN"), ("en", "en_US"), ("fr_FR", None), ("", None)],
)
def test_match_language(tag: str, expected: str | None) -> None:
    assert i18n.match_language(tag) == expected


def test_system_language_follows_locale() -> None:
    assert set_language(i18n.SYSTEM_LANGUAGE, "zh_CN") == "zh_CN"
    assert t("nav.home") == "主页"
    assert set_language(i18n.SYSTEM_LANGUAGE, "") == "en_US"
