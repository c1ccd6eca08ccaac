from __future__ import annotations

import streamlit as st

from app import session
from app.i18n import t
from app.ui_components import row_status_badges, status_chip
from app.validation import validate_config, validate_readings
from calc_core.demo_data import demo_readings
from calc_core.thermal import ThermalCalcError


def _column_config(shared_flow: bool) -> dict:
    cfg = {
        "label": st.column_config.TextColumn(t("columns.reading")),
        "th_in": st.column_config.NumberColumn(t("columns.th_in"), format="%.2f"),
        "th_out": st.column_config.NumberColumn(t("columns.th_out"), format="%.2f"),
        "tc_in": st.column_config.NumberColumn(t("columns.tc_in"), format="%.2f"),
        "tc_out": st.column_config.NumberColumn(t("columns.tc_out"), format="%.2f"),
    }
    if shared_flow:
        cfg["m"] = st.column_config.NumberColumn(t("columns.m"), format="%.3f")
    else:
        cfg["m_hot"] = st.column_config.NumberColumn(t("columns.m_hot"), format="%.3f")
        cfg["m_cold"] = st.column_config.NumberColumn(t("columns.m_cold"), format="%.3f")
    return cfg


def _commit_edits() -> None:
    state = st.session_state
    changes = state.get(session.editor_key(state)) or {}
    session.replace_readings(
        state, session.apply_editor_changes(state["readings_df"], changes)
    )


def render(state: dict) -> None:
    st.header(t("readings.header"))
    st.caption(t("readings.caption"))

    shared_flow = bool(state["shared_flow"])
    edited_df = st.data_editor(
        state["readings_df"],
        num_rows="dynamic",
        column_config=_column_config(shared_flow),
        use_container_width=True,
        key=session.editor_key(state),
        on_change=_commit_edits,
    )

    validation = validate_readings(edited_df, shared_flow=shared_flow, translator=t)
    row_status_badges(
        validation.row_status,
        {"OK": t("rows.ok"), "WARN": t("rows.warn"), "INVALID": t("rows.invalid")},
    )
    if validation.warnings:
        st.warning(t("readings.warnings") + "\n" + "\n".join(validation.warnings))
    if validation.errors:
        st.error(t("readings.errors") + "\n" + "\n".join(validation.errors))

    config_errors = validate_config(
        {
            "surface_area": state.get("surface_area"),
            "specific_heat": state.get("specific_heat"),
            "duty_policy": state.get("duty_policy"),
        },
        translator=t,
    )
    if config_errors:
        st.error(t("readings.config_errors") + " " + "; ".join(config_errors))

    readings = None if validation.has_errors else session.current_readings(state)

    cols = st.columns(2)
    with cols[0]:
        can_calc = readings is not None and not config_errors
        if st.button(t("readings.calculate_btn"), type="primary", disabled=not can_calc):
            try:
                batch = session.run_calc(state, readings)
                st.success(
                    t(
                        "readings.calculated",
                        ok=len(batch.results),
                        excluded=batch.excluded_count,
                    )
                )
                if batch.failures:
                    st.warning(t("readings.see_results"))
            except ThermalCalcError as exc:
                state["calc_error"] = f"{exc.kind}: {exc}"
                st.error(t("errors.calc_failed", exc=exc))
    with cols[1]:
        if st.button(t("readings.reset_btn")):
            session.replace_readings(
                state, session.readings_to_frame(demo_readings(), shared_flow=shared_flow)
            )
            st.rerun()

    status_chip(t("chips.calc"), session.calc_status(state, readings), t=t)
