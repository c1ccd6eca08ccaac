"""
UI strings: load_lang(lang) reads app/i18n/<lang>.json once per process,
t(key, **kwargs) looks the key up for the language chosen in the sidebar
(st.session_state["lang"]). A key missing in RU falls back to EN, a key
missing everywhere is returned as is.
"""
from __future__ import annotations

import json
from pathlib import Path

import streamlit as st

_I18N_DIR = Path(__file__).resolve().parent
_CACHE: dict[str, dict[str, str]] = {}

SUPPORTED_LANGS = ("EN", "RU")
DEFAULT_LANG = "EN"


def normalize_lang(lang: object) -> str:
    code = str(lang or "").strip().upper()
    return code if code in SUPPORTED_LANGS else DEFAULT_LANG


def load_lang(lang: str) -> dict[str, str]:
    code = normalize_lang(lang)
    if code not in _CACHE:
        path = _I18N_DIR / f"{code.lower()}.json"
        with path.open(encoding="utf-8") as f:
            _CACHE[code] = json.load(f)
    return _CACHE[code]


def _session_lang() -> str:
    try:
        return normalize_lang(st.session_state.get("lang"))
    except Exception:
        # no script run context (tests, CLI)
        return DEFAULT_LANG


def t(key: str, *, lang: str | None = None, **kwargs) -> str:
    code = normalize_lang(lang) if lang else _session_lang()
    raw = load_lang(code).get(key)
    if raw is None:
        raw = load_lang(DEFAULT_LANG).get(key, key)
    if not kwargs:
        return raw
    try:
        return raw.format(**kwargs)
    except (KeyError, ValueError):
        return raw
