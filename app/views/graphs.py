from __future__ import annotations

import streamlit as st

from app import charts
from app.i18n import t


def render(state: dict) -> None:
    st.header(t("graphs.header"))

    batch = state.get("batch")
    if batch is None:
        st.info(t("results.no_calc"))
        return

    df = charts.chart_frame(batch)
    if df.empty:
        st.warning(t("results.no_ok"))
        return

    titles = {
        "q_kw": t("graphs.q_title"),
        "lmtd": t("graphs.lmtd_title"),
        "u": t("graphs.u_title"),
        "effectiveness": t("graphs.effectiveness_title"),
    }
    conclusions = {
        "q_kw": t("graphs.q_conclusion"),
        "lmtd": t("graphs.lmtd_conclusion"),
        "u": t("graphs.u_conclusion"),
        "effectiveness": t("graphs.effectiveness_conclusion"),
    }

    for start in range(0, len(charts.LINE_CHARTS), 2):
        cols = st.columns(2)
        for col, (column, label_key, color) in zip(cols, charts.LINE_CHARTS[start:start + 2]):
            with col:
                st.subheader(titles[column])
                st.line_chart(
                    df,
                    x="m",
                    y=column,
                    color=color,
                    x_label=t("charts.m"),
                    y_label=t(label_key),
                )
                st.caption(conclusions[column])

    st.subheader(t("graphs.duty_title"))
    st.bar_chart(
        charts.duty_comparison_frame(batch).rename(
            columns={"qh_kw": t("columns.qh_kw"), "qc_kw": t("columns.qc_kw")}
        ),
        color=["#36A2EB", "#FF6384"],
        stack=False,
        y_label=t("charts.duty"),
    )
    st.caption(t("graphs.duty_conclusion"))
