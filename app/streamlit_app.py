from __future__ import annotations

import sys
from pathlib import Path
import streamlit as st

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app import session  # noqa: E402
from app.i18n import t  # noqa: E402
from app.i18n.core import SUPPORTED_LANGS  # noqa: E402
from app.views import export, graphs, readings, results  # noqa: E402
from calc_core.thermal import DUTY_POLICIES, DUTY_POLICY_MIN  # noqa: E402

PAGES = ("readings", "results", "graphs", "export")


def _on_shared_flow_change() -> None:
    state = st.session_state
    shared_flow = bool(state["shared_flow_toggle"])
    session.replace_readings(
        state, session.convert_frame(state["readings_df"], shared_flow=shared_flow)
    )
    state["shared_flow"] = shared_flow


def _render_sidebar(state) -> str:
    with st.sidebar:
        st.title(t("app.title"))
        st.radio(t("sidebar.language"), list(SUPPORTED_LANGS), key="lang", horizontal=True)

        st.subheader(t("sidebar.exchanger"))
        st.number_input(
            t("sidebar.surface_area"),
            min_value=0.0,
            step=0.001,
            format="%.4f",
            key="surface_area",
        )
        st.number_input(
            t("sidebar.specific_heat"),
            min_value=0.0,
            step=1.0,
            format="%.1f",
            key="specific_heat",
        )
        st.radio(
            t("sidebar.duty_policy"),
            list(DUTY_POLICIES),
            format_func=lambda x: t("policy.min") if x == DUTY_POLICY_MIN else t("policy.average"),
            key="duty_policy",
        )
        st.caption(t("sidebar.duty_policy_help"))
        st.checkbox(
            t("sidebar.shared_flow"),
            value=bool(state["shared_flow"]),
            key="shared_flow_toggle",
            on_change=_on_shared_flow_change,
        )

        page = st.radio(
            t("sidebar.navigation"),
            list(PAGES),
            format_func=lambda x: t(f"nav.{x}"),
        )
    return page


def main() -> None:
    st.set_page_config(page_title="Double Pipe Heat Exchanger", layout="wide")
    state = st.session_state
    session.init_state(state)

    page = _render_sidebar(state)
    st.title(t("app.heading"))

    views = dict(zip(PAGES, (readings, results, graphs, export)))
    views[page].render(state)


if __name__ == "__main__":
    main()
