"""Every UI string key used by the app exists in both EN and RU dictionaries."""
from __future__ import annotations

import json
import re
from pathlib import Path

import pytest

from app import charts
from app.streamlit_app import PAGES
from app.ui_components import _STATUS_KEYS

ROOT = Path(__file__).resolve().parents[1]

# t("key") in views, _tr(translator, "key") in validation
_LITERAL_KEY = re.compile(r'\b(?:t|_tr)\s*\(\s*(?:translator\s*,\s*)?["\']([a-z_]+\.[a-z_.]+)["\']')


def _dicts() -> dict[str, dict[str, str]]:
    out = {}
    for lang in ("en", "ru"):
        with (ROOT / "app" / "i18n" / f"{lang}.json").open(encoding="utf-8") as f:
            out[lang] = json.load(f)
    return out


def _literal_keys() -> set[str]:
    sources = [
        ROOT / "app" / "streamlit_app.py",
        ROOT / "app" / "validation.py",
        ROOT / "app" / "ui_components.py",
        *sorted((ROOT / "app" / "views").glob("*.py")),
    ]
    keys: set[str] = set()
    for path in sources:
        keys |= set(_LITERAL_KEY.findall(path.read_text(encoding="utf-8")))
    return keys


def _dynamic_keys() -> set[str]:
    keys = {f"nav.{page}" for page in PAGES}
    keys |= {label_key for _, label_key, _ in charts.LINE_CHARTS}
    keys |= set(_STATUS_KEYS.values())
    return keys


def test_literal_key_scan_sees_validation_messages() -> None:
    keys = _literal_keys()
    assert "validation.field_required" in keys
    assert "readings.calculate_btn" in keys
    assert "tooltips.details" in keys


@pytest.mark.parametrize("lang", ["en", "ru"])
def test_ui_keys_exist(lang: str) -> None:
    strings = _dicts()[lang]
    missing = (_literal_keys() | _dynamic_keys()) - set(strings)
    assert not missing, f"Keys used by the UI but missing in {lang}.json: {sorted(missing)}"
