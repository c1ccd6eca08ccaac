from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, MutableMapping

import pandas as pd

from calc_core.demo_data import demo_readings
from calc_core.readings_io import reading_from_record, reading_to_record
from calc_core.thermal import (
    DEFAULT_SPECIFIC_HEAT,
    DEFAULT_SURFACE_AREA,
    DUTY_POLICY_MIN,
    BatchResult,
    ExchangerConfig,
    Reading,
    compute,
)

TEMP_COLUMNS = ["th_in", "th_out", "tc_in", "tc_out"]
SHARED_COLUMNS = ["label", "m", *TEMP_COLUMNS]
SPLIT_COLUMNS = ["label", "m_hot", "m_cold", *TEMP_COLUMNS]

STATUS_OK = "OK"
STATUS_STALE = "STALE"
STATUS_NO_CALC = "NO_CALC"


@dataclass(frozen=True)
class StatusInfo:
    status: str
    calc_updated_at: str | None = None
    reason: str | None = None


def _iso_utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def input_columns(shared_flow: bool) -> list[str]:
    return list(SHARED_COLUMNS if shared_flow else SPLIT_COLUMNS)


def readings_to_frame(readings: list[Reading], *, shared_flow: bool) -> pd.DataFrame:
    records = []
    for r in readings:
        rec = reading_to_record(r)
        if shared_flow:
            rec.setdefault("m", rec.get("m_hot"))
        else:
            rec.setdefault("m_hot", rec.get("m"))
            rec.setdefault("m_cold", rec.get("m"))
        records.append(rec)
    return pd.DataFrame(records, columns=input_columns(shared_flow))


def convert_frame(df: pd.DataFrame, *, shared_flow: bool) -> pd.DataFrame:
    """Switches the editor frame between shared and split flow columns."""
    out = df.copy()
    if shared_flow and "m" not in out.columns:
        out["m"] = out["m_hot"] if "m_hot" in out.columns else None
    if not shared_flow:
        if "m_hot" not in out.columns:
            out["m_hot"] = out["m"] if "m" in out.columns else None
        if "m_cold" not in out.columns:
            out["m_cold"] = out["m"] if "m" in out.columns else None
    for col in input_columns(shared_flow):
        if col not in out.columns:
            out[col] = None
    return out[input_columns(shared_flow)].reset_index(drop=True)


def _clean(value: Any) -> Any:
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        return value
    if hasattr(value, "item"):
        # numpy scalars -> python scalars
        return value.item()
    return value


def readings_from_frame(df: pd.DataFrame, *, shared_flow: bool) -> list[Reading]:
    """Raises ValueError on the first row that cannot be turned into a Reading."""
    readings: list[Reading] = []
    cols = input_columns(shared_flow)
    for pos, (_, row) in enumerate(df.iterrows(), start=1):
        record = {col: _clean(row.get(col)) for col in cols}
        readings.append(reading_from_record(record, ctx=f"reading #{pos}"))
    return readings


def init_state(state: MutableMapping[str, Any]) -> None:
    state.setdefault("lang", "EN")
    state.setdefault("shared_flow", True)
    state.setdefault("surface_area", DEFAULT_SURFACE_AREA)
    state.setdefault("specific_heat", DEFAULT_SPECIFIC_HEAT)
    state.setdefault("duty_policy", DUTY_POLICY_MIN)
    if "readings_df" not in state:
        state["readings_df"] = readings_to_frame(demo_readings(), shared_flow=True)
    state.setdefault("editor_version", 0)
    state.setdefault("batch", None)
    state.setdefault("calc_fingerprint", None)
    state.setdefault("calc_updated_at", None)
    state.setdefault("calc_error", None)


def current_config(state: MutableMapping[str, Any]) -> ExchangerConfig:
    return ExchangerConfig(
        surface_area=float(state["surface_area"]),
        specific_heat=float(state["specific_heat"]),
        duty_policy=str(state["duty_policy"]),
    )


def inputs_fingerprint(readings: list[Reading], config: ExchangerConfig) -> tuple:
    return (tuple(readings), config)


def run_calc(state: MutableMapping[str, Any], readings: list[Reading]) -> BatchResult:
    """
    Calls the calculator and stores the batch with its input fingerprint.
    Batch-level ThermalCalcError propagates to the caller; the previous batch
    is dropped so stale numbers are not shown as current.
    """
    config = current_config(state)
    state["batch"] = None
    state["calc_fingerprint"] = None
    batch = compute(readings, config)
    state["batch"] = batch
    state["calc_fingerprint"] = inputs_fingerprint(readings, config)
    state["calc_updated_at"] = _iso_utc_now()
    state["calc_error"] = None
    return batch


def calc_status(
    state: MutableMapping[str, Any], readings: list[Reading] | None
) -> StatusInfo:
    batch: BatchResult | None = state.get("batch")
    calc_updated_at = state.get("calc_updated_at")
    if batch is None:
        return StatusInfo(status=STATUS_NO_CALC, reason=state.get("calc_error"))
    if readings is None:
        return StatusInfo(status=STATUS_STALE, calc_updated_at=calc_updated_at, reason="invalid_input")
    if state.get("calc_fingerprint") != inputs_fingerprint(readings, current_config(state)):
        return StatusInfo(status=STATUS_STALE, calc_updated_at=calc_updated_at, reason="input_changed")
    reason = f"excluded={batch.excluded_count}" if batch.excluded_count else None
    return StatusInfo(status=STATUS_OK, calc_updated_at=calc_updated_at, reason=reason)


def current_readings(state: MutableMapping[str, Any]) -> list[Reading] | None:
    """Readings as currently committed from the editor, or None if a row cannot be read."""
    try:
        return readings_from_frame(state["readings_df"], shared_flow=bool(state["shared_flow"]))
    except ValueError:
        return None


def editor_key(state: MutableMapping[str, Any]) -> str:
    return f"readings_editor_{state.get('editor_version', 0)}"


def replace_readings(state: MutableMapping[str, Any], df: pd.DataFrame) -> None:
    """Stores a new editor frame; the editor widget restarts from it."""
    state.pop(editor_key(state), None)
    state["readings_df"] = df.reset_index(drop=True)
    state["editor_version"] = int(state.get("editor_version", 0)) + 1


def apply_editor_changes(df: pd.DataFrame, changes: dict[str, Any]) -> pd.DataFrame:
    """
    Applies a st.data_editor change set (edited_rows / deleted_rows /
    added_rows, positions relative to df) and returns a new frame.
    """
    out = df.reset_index(drop=True).copy()
    for row_pos, values in (changes.get("edited_rows") or {}).items():
        for col, val in values.items():
            out.at[int(row_pos), col] = val
    deleted = sorted(int(i) for i in changes.get("deleted_rows") or [])
    if deleted:
        out = out.drop(index=deleted)
    added = changes.get("added_rows") or []
    if added:
        out = pd.concat([out, pd.DataFrame(added, columns=out.columns)], ignore_index=True)
    return out.reset_index(drop=True)
