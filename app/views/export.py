from __future__ import annotations

import csv
import io
import json

import streamlit as st

from app import session
from app.i18n import t
from calc_core.export_results import RESULT_COLUMNS, build_payload, build_result_rows


def _csv_text(header: list[str], rows: list[list[str]]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(header)
    writer.writerows(rows)
    return buf.getvalue()


def render(state: dict) -> None:
    st.header(t("export.header"))

    batch = state.get("batch")
    if batch is None:
        st.info(t("results.no_calc"))
        return

    info = session.calc_status(state, session.current_readings(state))
    if info.status != session.STATUS_OK:
        st.error(t("export.blocked", status=info.status))
        allow = st.checkbox(t("export.allow_stale"))
        if not allow:
            return

    st.subheader(t("export.json"))
    payload = build_payload(batch)
    st.download_button(
        t("export.json_btn"),
        data=json.dumps(payload, ensure_ascii=False, indent=2) + "\n",
        file_name="heat_exchanger_results.json",
        mime="application/json",
    )
    with st.expander(t("export.preview")):
        st.json(payload)

    st.subheader(t("export.csv"))
    st.download_button(
        t("export.csv_btn"),
        data=_csv_text(RESULT_COLUMNS, build_result_rows(batch)),
        file_name="heat_exchanger_results.csv",
        mime="text/csv",
    )
