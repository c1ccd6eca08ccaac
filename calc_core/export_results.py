from __future__ import annotations

import csv
import math
from datetime import datetime, timezone
from pathlib import Path

from .thermal import BatchResult, ReadingResult, format_percent

PAYLOAD_VERSION = "1.0"

RESULT_COLUMNS = [
    "reading",
    "m_hot_kg_s",
    "m_cold_kg_s",
    "th_in_c",
    "th_out_c",
    "tc_in_c",
    "tc_out_c",
    "qh_kw",
    "qc_kw",
    "q_kw",
    "lmtd_c",
    "u_w_m2c",
    "effectiveness",
    "status",
    "message",
]


def _iso_utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def _kw(value_w: float) -> float:
    return value_w / 1000.0


def reading_label(index: int, label: str | None) -> str:
    return label or f"Reading {index + 1}"


def _result_entry(res: ReadingResult) -> dict:
    r = res.reading
    return {
        "index": res.index,
        "label": reading_label(res.index, r.label),
        "input": {
            "m_hot_kg_s": r.hot_mass_flow,
            "m_cold_kg_s": r.cold_mass_flow,
            "th_in_c": r.hot_inlet_temp,
            "th_out_c": r.hot_outlet_temp,
            "tc_in_c": r.cold_inlet_temp,
            "tc_out_c": r.cold_outlet_temp,
        },
        "calc": {
            "qh_w": res.hot_duty,
            "qc_w": res.cold_duty,
            "q_w": res.heat_duty,
            "delta_t1_c": res.delta_t1,
            "delta_t2_c": res.delta_t2,
            "lmtd_c": res.lmtd,
            "u_w_m2c": res.overall_coefficient,
            "c_min_w_c": res.c_min,
            "q_max_w": res.q_max,
            "effectiveness": res.effectiveness,
        },
        "warnings": list(res.warnings),
    }


def build_payload(batch: BatchResult, *, generated_at: str | None = None) -> dict:
    """JSON-serialisable view of a batch (SI units, W and °C)."""
    if not isinstance(batch, BatchResult):
        raise ValueError("batch must be a BatchResult")
    return {
        "version": PAYLOAD_VERSION,
        "generated_at": generated_at or _iso_utc_now(),
        "config": {
            "surface_area_m2": batch.config.surface_area,
            "specific_heat_j_kgc": batch.config.specific_heat,
            "duty_policy": batch.duty_policy,
        },
        "results": [_result_entry(res) for res in batch.results],
        "failures": [
            {
                "index": f.index,
                "label": reading_label(f.index, f.reading.label),
                "kind": f.kind,
                "message": f.message,
            }
            for f in batch.failures
        ],
        "summary": {
            "reading_count": batch.reading_count,
            "ok_count": len(batch.results),
            "excluded_count": batch.excluded_count,
            "average_effectiveness_pct": batch.average_effectiveness_pct,
        },
    }


def _format_value(column: str, value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        num = float(value)
        if not math.isfinite(num):
            return ""
        decimals = _decimals_for_column(column)
        if decimals is None:
            return _format_default_number(num)
        return f"{num:.{decimals}f}"
    return str(value)


def _decimals_for_column(column: str) -> int | None:
    if column == "effectiveness":
        return 3
    if column.endswith("_kw") or column in {"lmtd_c", "u_w_m2c"}:
        return 2
    return None


def _format_default_number(value: float) -> str:
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    if text in {"-0", "-0.0", ""}:
        return "0"
    return text


def build_result_rows(batch: BatchResult) -> list[list[str]]:
    """
    Table rows in input order: successful readings and failures interleaved
    by their original index. Q is reported in kW.
    """
    records: list[tuple[int, dict]] = []
    for res in batch.results:
        r = res.reading
        records.append(
            (
                res.index,
                {
                    "reading": reading_label(res.index, r.label),
                    "m_hot_kg_s": r.hot_mass_flow,
                    "m_cold_kg_s": r.cold_mass_flow,
                    "th_in_c": r.hot_inlet_temp,
                    "th_out_c": r.hot_outlet_temp,
                    "tc_in_c": r.cold_inlet_temp,
                    "tc_out_c": r.cold_outlet_temp,
                    "qh_kw": _kw(res.hot_duty),
                    "qc_kw": _kw(res.cold_duty),
                    "q_kw": _kw(res.heat_duty),
                    "lmtd_c": res.lmtd,
                    "u_w_m2c": res.overall_coefficient,
                    "effectiveness": res.effectiveness,
                    "status": "OK",
                    "message": "; ".join(res.warnings),
                },
            )
        )
    for f in batch.failures:
        r = f.reading
        records.append(
            (
                f.index,
                {
                    "reading": reading_label(f.index, r.label),
                    "m_hot_kg_s": r.hot_mass_flow,
                    "m_cold_kg_s": r.cold_mass_flow,
                    "th_in_c": r.hot_inlet_temp,
                    "th_out_c": r.hot_outlet_temp,
                    "tc_in_c": r.cold_inlet_temp,
                    "tc_out_c": r.cold_outlet_temp,
                    "status": f.kind,
                    "message": f.message,
                },
            )
        )
    records.sort(key=lambda item: item[0])
    return [
        [_format_value(col, record.get(col)) for col in RESULT_COLUMNS]
        for _, record in records
    ]


def summary_line(batch: BatchResult) -> str:
    text = f"average_effectiveness_pct={format_percent(batch.average_effectiveness_pct)}"
    text += f" policy={batch.duty_policy}"
    if batch.excluded_count:
        text += f" excluded={batch.excluded_count}"
    return text


def write_results_csv(batch: BatchResult, out_path: str | Path) -> Path:
    path = Path(out_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(RESULT_COLUMNS)
        writer.writerows(build_result_rows(batch))
    return path
