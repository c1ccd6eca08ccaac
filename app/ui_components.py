from __future__ import annotations

from dataclasses import asdict
from typing import Callable, Mapping

import streamlit as st

from app.session import StatusInfo

_STATUS_KEYS = {"OK": "status.ok", "STALE": "status.stale", "NO_CALC": "status.no_calc"}

# (bg, fg); readable in both light and dark themes
_PALETTE = {
    "OK": ("#1f7a3a", "white"),
    "STALE": ("#b45309", "white"),
    "WARN": ("#b45309", "white"),
    "NO_CALC": ("#b91c1c", "white"),
    "INVALID": ("#b91c1c", "white"),
}
_FALLBACK = ("#374151", "white")


def _pill_html(text: str, status: str, *, title: str = "") -> str:
    bg, fg = _PALETTE.get((status or "").upper().strip(), _FALLBACK)
    title = title.replace('"', "'")
    return (
        f'<span title="{title}" style="display:inline-block;padding:0.15rem 0.55rem;'
        f"border-radius:999px;background:{bg};color:{fg};font-weight:600;"
        f'font-size:0.85rem;line-height:1.4;white-space:nowrap;">{text}</span>'
    )


def _details_text(info: StatusInfo) -> str:
    parts: list[str] = [f"status={info.status}"]
    if info.reason:
        parts.append(f"reason={info.reason}")
    if info.calc_updated_at:
        parts.append(f"calc_updated_at={info.calc_updated_at}")
    return "; ".join(parts)


def status_chip(
    label: str,
    info: StatusInfo,
    *,
    show_details: bool = True,
    t: Callable[..., str] | None = None,
) -> None:
    """
    Calculation status pill with optional details popover.
    OK = results match the inputs on screen, STALE = inputs edited since
    the last calculation, NO_CALC = nothing calculated yet.
    """
    status_label = t(_STATUS_KEYS.get(info.status, "status.no_calc")) if t else info.status

    cols = st.columns([2, 3], vertical_alignment="center")
    with cols[0]:
        st.markdown(
            _pill_html(f"{label}: {status_label}", info.status, title=_details_text(info)),
            unsafe_allow_html=True,
        )
    with cols[1]:
        if show_details:
            with st.popover(t("tooltips.details") if t else "Details"):
                st.json(asdict(info))


def row_status_badges(row_status: Mapping[int, str], labels: Mapping[str, str]) -> None:
    """One pill per row status (OK / WARN / INVALID) with its row count."""
    counts: dict[str, int] = {}
    for status in row_status.values():
        counts[status] = counts.get(status, 0) + 1
    pills = [
        _pill_html(f"{labels.get(status, status)}: {counts[status]}", status)
        for status in ("OK", "WARN", "INVALID")
        if counts.get(status)
    ]
    if pills:
        st.markdown("&nbsp;".join(pills), unsafe_allow_html=True)


def efficiency_banner(text: str) -> None:
    st.markdown(
        '<p style="font-size:1.1rem;font-weight:500;color:#2e7d32;'
        'background-color:#e8f5e9;padding:10px;border-radius:8px;">'
        f"&#9989; {text}</p>",
        unsafe_allow_html=True,
    )
