from __future__ import annotations

import pandas as pd
import pytest

from app import session
from calc_core.demo_data import demo_readings
from calc_core.thermal import EmptyBatchError, InvalidConfigError


def _state() -> dict:
    state: dict = {}
    session.init_state(state)
    return state


def test_init_state_loads_demo_readings() -> None:
    state = _state()
    df = state["readings_df"]
    assert list(df.columns) == session.SHARED_COLUMNS
    assert len(df) == 3
    assert session.current_readings(state) == demo_readings()
    assert session.calc_status(state, session.current_readings(state)).status == session.STATUS_NO_CALC


def test_run_calc_then_edit_marks_results_stale() -> None:
    state = _state()
    batch = session.run_calc(state, session.current_readings(state))
    assert len(batch.results) == 3
    assert session.calc_status(state, session.current_readings(state)).status == session.STATUS_OK

    state["surface_area"] = 0.2
    info = session.calc_status(state, session.current_readings(state))
    assert info.status == session.STATUS_STALE
    assert info.reason == "input_changed"

    state["surface_area"] = session.DEFAULT_SURFACE_AREA
    edited = session.apply_editor_changes(state["readings_df"], {"edited_rows": {0: {"th_out": 66.0}}})
    session.replace_readings(state, edited)
    assert session.calc_status(state, session.current_readings(state)).status == session.STATUS_STALE


def test_status_reports_excluded_readings() -> None:
    state = _state()
    df = session.apply_editor_changes(
        state["readings_df"],
        {"added_rows": [{"label": "bad", "m": 0.2, "th_in": 30, "th_out": 25, "tc_in": 35, "tc_out": 40}]},
    )
    session.replace_readings(state, df)
    readings = session.current_readings(state)
    session.run_calc(state, readings)
    info = session.calc_status(state, readings)
    assert info.status == session.STATUS_OK
    assert info.reason == "excluded=1"


def test_run_calc_batch_error_clears_previous_results() -> None:
    state = _state()
    session.run_calc(state, session.current_readings(state))
    state["surface_area"] = 0.0
    with pytest.raises(InvalidConfigError):
        session.run_calc(state, session.current_readings(state))
    assert state["batch"] is None
    state["surface_area"] = session.DEFAULT_SURFACE_AREA
    with pytest.raises(EmptyBatchError):
        session.run_calc(state, [])


def test_apply_editor_changes_edit_delete_add() -> None:
    df = session.readings_to_frame(demo_readings(), shared_flow=True)
    out = session.apply_editor_changes(
        df,
        {
            "edited_rows": {2: {"m": 0.35}},
            "deleted_rows": [0],
            "added_rows": [{"m": 0.4, "th_in": 95}],
        },
    )
    assert len(out) == 3
    assert list(out["m"])[:2] == [0.25, 0.35]
    assert out.loc[2, "th_in"] == 95
    assert pd.isna(out.loc[2, "tc_out"])
    assert list(out.index) == [0, 1, 2]
    assert session.readings_from_frame(out.iloc[:2], shared_flow=True)[1].hot_mass_flow == 0.35
    # added row has no tc_out
    with pytest.raises(ValueError):
        session.readings_from_frame(out, shared_flow=True)


def test_convert_frame_between_shared_and_split_flow() -> None:
    shared = session.readings_to_frame(demo_readings(), shared_flow=True)
    split = session.convert_frame(shared, shared_flow=False)
    assert list(split.columns) == session.SPLIT_COLUMNS
    assert list(split["m_hot"]) == list(split["m_cold"]) == [0.22, 0.25, 0.30]

    split.loc[0, "m_cold"] = 0.5
    readings = session.readings_from_frame(split, shared_flow=False)
    assert readings[0].cold_mass_flow == 0.5
    assert not readings[0].shared_flow

    back = session.convert_frame(split, shared_flow=True)
    assert list(back.columns) == session.SHARED_COLUMNS
    assert list(back["m"]) == [0.22, 0.25, 0.30]


def test_replace_readings_bumps_editor_key() -> None:
    state = _state()
    key = session.editor_key(state)
    state[key] = {"edited_rows": {}}
    session.replace_readings(state, state["readings_df"])
    assert key not in state
    assert session.editor_key(state) != key
