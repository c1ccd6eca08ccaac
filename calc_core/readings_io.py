from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any

from .thermal import Reading

TEMP_FIELDS = ("th_in", "th_out", "tc_in", "tc_out")


def _coerce_float(value: object, field: str, ctx: str) -> float:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"{field} is missing for {ctx}")
    if isinstance(value, bool):
        raise ValueError(f"{field} is not a number for {ctx}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field} is not a number for {ctx}") from exc


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def reading_from_record(record: dict[str, Any], *, ctx: str = "record") -> Reading:
    """
    Builds a Reading from a flat record.

    Accepted keys: either `m` (shared flow) or `m_hot` + `m_cold`,
    plus th_in, th_out, tc_in, tc_out and an optional label.
    """
    if not isinstance(record, dict):
        raise ValueError(f"{ctx} must be an object")
    keys = {str(k).strip().lower(): v for k, v in record.items()}

    temps = {name: _coerce_float(keys.get(name), name, ctx) for name in TEMP_FIELDS}

    split = not _is_blank(keys.get("m_hot")) or not _is_blank(keys.get("m_cold"))
    if not split and _is_blank(keys.get("m")):
        split = "m_hot" in keys or "m_cold" in keys
    if split:
        m_hot = _coerce_float(keys.get("m_hot"), "m_hot", ctx)
        m_cold = _coerce_float(keys.get("m_cold"), "m_cold", ctx)
    else:
        m_hot = m_cold = _coerce_float(keys.get("m"), "m", ctx)

    label = keys.get("label")
    return Reading(
        hot_mass_flow=m_hot,
        cold_mass_flow=m_cold,
        hot_inlet_temp=temps["th_in"],
        hot_outlet_temp=temps["th_out"],
        cold_inlet_temp=temps["tc_in"],
        cold_outlet_temp=temps["tc_out"],
        label=None if _is_blank(label) else str(label).strip(),
    )


def reading_to_record(reading: Reading) -> dict[str, Any]:
    record: dict[str, Any] = {}
    if reading.label:
        record["label"] = reading.label
    if reading.shared_flow:
        record["m"] = reading.hot_mass_flow
    else:
        record["m_hot"] = reading.hot_mass_flow
        record["m_cold"] = reading.cold_mass_flow
    record["th_in"] = reading.hot_inlet_temp
    record["th_out"] = reading.hot_outlet_temp
    record["tc_in"] = reading.cold_inlet_temp
    record["tc_out"] = reading.cold_outlet_temp
    return record


def load_readings_json(path: str | Path) -> list[Reading]:
    src = Path(path)
    data = json.loads(src.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("readings")
    if not isinstance(data, list):
        raise ValueError(f"JSON root must be a list or an object with 'readings': {src}")
    return [reading_from_record(item, ctx=f"{src.name}[{i}]") for i, item in enumerate(data)]


def load_readings_csv(path: str | Path) -> list[Reading]:
    src = Path(path)
    with src.open(encoding="utf-8", newline="") as handle:
        reader = csv.DictReader(handle)
        if reader.fieldnames is None:
            raise ValueError(f"CSV header is missing: {src}")
        # header is line 1
        return [
            reading_from_record(row, ctx=f"{src.name}:{line}")
            for line, row in enumerate(reader, start=2)
        ]


def load_readings(path: str | Path) -> list[Reading]:
    src = Path(path)
    suffix = src.suffix.lower()
    if suffix == ".json":
        return load_readings_json(src)
    if suffix == ".csv":
        return load_readings_csv(src)
    raise ValueError(f"Unsupported readings file type: {src.suffix or '(none)'}")
