from __future__ import annotations

import pandas as pd

from calc_core.export_results import reading_label
from calc_core.thermal import BatchResult

RESULT_TABLE_COLUMNS = [
    "reading",
    "m",
    "qh_kw",
    "qc_kw",
    "q_kw",
    "lmtd",
    "u",
    "effectiveness",
    "warnings",
]

# (column, y-axis label key, color)
LINE_CHARTS = [
    ("q_kw", "charts.q", "#2e7d32"),
    ("lmtd", "charts.lmtd", "#1f4e9c"),
    ("u", "charts.u", "#b91c1c"),
    ("effectiveness", "charts.effectiveness", "#d97706"),
]


def results_frame(batch: BatchResult) -> pd.DataFrame:
    """One row per successful reading, input order, duties in kW."""
    rows = [
        {
            "reading": reading_label(res.index, res.reading.label),
            "m": res.reading.hot_mass_flow,
            "qh_kw": res.hot_duty / 1000.0,
            "qc_kw": res.cold_duty / 1000.0,
            "q_kw": res.heat_duty / 1000.0,
            "lmtd": res.lmtd,
            "u": res.overall_coefficient,
            "effectiveness": res.effectiveness,
            "warnings": "; ".join(res.warnings),
        }
        for res in batch.results
    ]
    return pd.DataFrame(rows, columns=RESULT_TABLE_COLUMNS)


def failures_frame(batch: BatchResult) -> pd.DataFrame:
    rows = [
        {
            "reading": reading_label(f.index, f.reading.label),
            "kind": f.kind,
            "message": f.message,
        }
        for f in batch.failures
    ]
    return pd.DataFrame(rows, columns=["reading", "kind", "message"])


def chart_frame(batch: BatchResult) -> pd.DataFrame:
    """Results ordered by mass flow for the line charts (x = m)."""
    df = results_frame(batch)
    return df.sort_values(by="m", kind="stable").reset_index(drop=True)


def duty_comparison_frame(batch: BatchResult) -> pd.DataFrame:
    """Qh and Qc side by side, indexed by reading label."""
    df = results_frame(batch)
    return df[["reading", "qh_kw", "qc_kw"]].set_index("reading")


def format_results_table(df: pd.DataFrame) -> pd.DataFrame:
    """Display precision: 2 decimals, effectiveness 3 decimals."""
    out = df.copy()
    for col in ("qh_kw", "qc_kw", "q_kw", "lmtd", "u"):
        out[col] = out[col].map(lambda v: f"{v:.2f}")
    out["effectiveness"] = out["effectiveness"].map(lambda v: f"{v:.3f}")
    return out
