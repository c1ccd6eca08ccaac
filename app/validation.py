from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable

import pandas as pd

from calc_core.thermal import InvalidConfigError, normalize_duty_policy

Translator = Callable[..., str]

# Default English strings for backward compatibility when translator is not provided.
_VALIDATION_EN = {
    "validation.field_required": "{field} is required",
    "validation.field_number": "{field} must be a number",
    "validation.field_positive": "{field} must be > 0",
    "validation.flow_not_positive": "{field} <= 0: reading will be excluded",
    "validation.hot_not_cooling": "hot stream does not cool (th_in <= th_out)",
    "validation.cold_not_heating": "cold stream does not heat (tc_out <= tc_in)",
    "validation.inlet_crossover": "th_in <= tc_in: reading will be excluded",
    "validation.duty_policy": "duty_policy must be MIN or AVERAGE",
    "validation.no_readings": "at least one reading is required",
}

FLOW_FIELDS_SHARED = ("m",)
FLOW_FIELDS_SPLIT = ("m_hot", "m_cold")
TEMP_FIELDS = ("th_in", "th_out", "tc_in", "tc_out")


def _tr(translator: Translator | None, key: str, **kwargs: Any) -> str:
    if translator is None:
        raw = _VALIDATION_EN.get(key, key)
        return raw.format(**kwargs) if kwargs else raw
    return translator(key, **kwargs)


@dataclass(frozen=True)
class ValidationResult:
    errors: list[str]
    warnings: list[str]
    row_status: dict[int, str]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


def is_finite(value: Any) -> bool:
    try:
        num = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(num)


def _is_missing(value: Any) -> bool:
    if value is None or value == "":
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def validate_config(data: dict[str, Any], *, translator: Translator | None = None) -> list[str]:
    """Exchanger config as entered in the sidebar."""
    errors: list[str] = []
    for field in ("surface_area", "specific_heat"):
        val = data.get(field)
        if _is_missing(val):
            errors.append(_tr(translator, "validation.field_required", field=field))
        elif not is_finite(val):
            errors.append(_tr(translator, "validation.field_number", field=field))
        elif float(val) <= 0:
            errors.append(_tr(translator, "validation.field_positive", field=field))

    try:
        normalize_duty_policy(str(data.get("duty_policy") or ""))
    except InvalidConfigError:
        errors.append(_tr(translator, "validation.duty_policy"))
    return errors


def validate_readings(
    df: pd.DataFrame, *, shared_flow: bool, translator: Translator | None = None
) -> ValidationResult:
    """
    Validates the readings editor frame.

    Errors block the calculation (value cannot be read as a number).
    Physics problems are warnings: the calculator reports them per reading.
    """
    errors: list[str] = []
    warnings: list[str] = []
    statuses: dict[int, str] = {}

    if df.empty:
        errors.append(_tr(translator, "validation.no_readings"))
        return ValidationResult(errors=errors, warnings=warnings, row_status=statuses)

    flow_fields = FLOW_FIELDS_SHARED if shared_flow else FLOW_FIELDS_SPLIT

    for pos, (idx, row) in enumerate(df.iterrows(), start=1):
        row_errors: list[str] = []
        row_warnings: list[str] = []
        label = str(row.get("label") or "").strip()
        if label in ("", "nan", "None"):
            label = f"#{pos}"

        values: dict[str, float] = {}
        for field in (*flow_fields, *TEMP_FIELDS):
            val = row.get(field)
            if _is_missing(val):
                row_errors.append(_tr(translator, "validation.field_required", field=field))
            elif not is_finite(val):
                row_errors.append(_tr(translator, "validation.field_number", field=field))
            else:
                values[field] = float(val)

        for field in flow_fields:
            if field in values and values[field] <= 0:
                row_warnings.append(_tr(translator, "validation.flow_not_positive", field=field))

        if "th_in" in values and "th_out" in values and values["th_in"] <= values["th_out"]:
            row_warnings.append(_tr(translator, "validation.hot_not_cooling"))
        if "tc_in" in values and "tc_out" in values and values["tc_out"] <= values["tc_in"]:
            row_warnings.append(_tr(translator, "validation.cold_not_heating"))
        if "th_in" in values and "tc_in" in values and values["th_in"] <= values["tc_in"]:
            row_warnings.append(_tr(translator, "validation.inlet_crossover"))

        if row_errors:
            errors.append(f"{label}: " + "; ".join(row_errors))
            statuses[idx] = "INVALID"
        elif row_warnings:
            statuses[idx] = "WARN"
        else:
            statuses[idx] = "OK"

        if row_warnings:
            warnings.append(f"{label}: " + "; ".join(row_warnings))

    return ValidationResult(errors=errors, warnings=warnings, row_status=statuses)
