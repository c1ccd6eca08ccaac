from __future__ import annotations

import pytest

from app import charts
from calc_core.demo_data import demo_readings
from calc_core.thermal import ExchangerConfig, Reading, compute


def _batch():
    readings = list(reversed(demo_readings()))
    readings.append(Reading.with_shared_flow(0.2, 30.0, 25.0, 35.0, 40.0, label="bad"))
    return compute(readings, ExchangerConfig())


def test_results_frame_has_one_row_per_successful_reading() -> None:
    df = charts.results_frame(_batch())
    assert list(df.columns) == charts.RESULT_TABLE_COLUMNS
    assert list(df["reading"]) == ["Reading 3", "Reading 2", "Reading 1"]
    assert df.loc[2, "q_kw"] == pytest.approx(11.97196)
    assert df.loc[2, "qc_kw"] == pytest.approx(15.65564)


def test_chart_frame_is_sorted_by_mass_flow() -> None:
    df = charts.chart_frame(_batch())
    assert list(df["m"]) == [0.22, 0.25, 0.30]


def test_duty_comparison_and_failures_frames() -> None:
    batch = _batch()
    duty = charts.duty_comparison_frame(batch)
    assert list(duty.columns) == ["qh_kw", "qc_kw"]
    assert duty.index.name == "reading"

    failures = charts.failures_frame(batch)
    assert list(failures["reading"]) == ["bad"]
    assert list(failures["kind"]) == ["INVALID_TEMPERATURE_PROFILE"]


def test_format_results_table_precision() -> None:
    table = charts.format_results_table(charts.results_frame(_batch()))
    assert table.loc[2, "q_kw"] == "11.97"
    assert table.loc[2, "effectiveness"] == "0.265"
