from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest


@pytest.mark.parametrize("package", ["app", "calc_core", "tools"])
def test_sources_compile(package: str) -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / package

    result = subprocess.run(
        [sys.executable, "-m", "compileall", "-q", str(src_dir)],
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode == 0, (
        f"compileall failed for {package}/.\n"
        f"stdout:\n{result.stdout}\n"
        f"stderr:\n{result.stderr}"
    )


def test_i18n_translates_and_falls_back() -> None:
    from app.i18n import load_lang, t

    assert load_lang("EN")["nav.readings"] == "Readings"
    assert load_lang("RU")["nav.readings"] != load_lang("EN")["nav.readings"]
    assert t("no.such.key") == "no.such.key"
    assert t("nav.readings", lang="ru") == load_lang("RU")["nav.readings"]
    assert t("readings.calculated", lang="EN", ok=3, excluded=0) == "Calculated: 3 reading(s), excluded: 0."
