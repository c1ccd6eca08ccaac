from __future__ import annotations

import streamlit as st

from app import charts, session
from app.i18n import t
from app.ui_components import efficiency_banner, status_chip
from calc_core.thermal import format_percent


def _column_labels() -> dict[str, str]:
    return {
        "reading": t("columns.reading"),
        "m": t("columns.m"),
        "qh_kw": t("columns.qh_kw"),
        "qc_kw": t("columns.qc_kw"),
        "q_kw": t("columns.q_kw"),
        "lmtd": t("columns.lmtd"),
        "u": t("columns.u"),
        "effectiveness": t("columns.effectiveness"),
        "warnings": t("columns.warnings"),
    }


def render(state: dict) -> None:
    st.header(t("results.header"))

    status_chip(t("chips.calc"), session.calc_status(state, session.current_readings(state)), t=t)

    batch = state.get("batch")
    if batch is None:
        st.info(t("results.no_calc"))
        return

    policy_label = t("policy.min") if batch.duty_policy == "MIN" else t("policy.average")
    st.caption(
        t(
            "results.config_caption",
            area=f"{batch.config.surface_area:g}",
            cp=f"{batch.config.specific_heat:g}",
            policy=policy_label,
        )
    )

    df = charts.results_frame(batch)
    if df.empty:
        st.warning(t("results.no_ok"))
    else:
        st.dataframe(
            charts.format_results_table(df).rename(columns=_column_labels()),
            use_container_width=True,
            hide_index=True,
        )

    if batch.average_effectiveness_pct is not None:
        efficiency_banner(
            t(
                "results.avg_efficiency",
                value=format_percent(batch.average_effectiveness_pct),
            )
        )

    if batch.failures:
        st.error(t("results.excluded", count=batch.excluded_count))
        st.dataframe(
            charts.failures_frame(batch).rename(
                columns={
                    "reading": t("columns.reading"),
                    "kind": t("columns.kind"),
                    "message": t("columns.message"),
                }
            ),
            use_container_width=True,
            hide_index=True,
        )
