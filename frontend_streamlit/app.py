"""
Mentor Diagnosis - Guided diagnostic questionnaire for mentors

Main entry point: login, sidebar menu and view routing.
Run with: streamlit run frontend_streamlit/app.py
"""

from lib.session_utils import (
    end_dashboard,
    get_dashboard,
    load_environment,
    setup_paths,
    start_dashboard,
)

setup_paths()
load_environment()

import streamlit as st  # noqa: E402

from mentor_diagnosis.config import MENU_SECTIONS, DashboardView  # noqa: E402
from mentor_diagnosis.telemetry import init_telemetry  # noqa: E402
from mentor_diagnosis.workflow import get_module_registry  # noqa: E402

# Page config must be first Streamlit command
st.set_page_config(
    page_title="Diagnóstico do Mentor",
    page_icon="🧭",
    layout="wide",
    initial_sidebar_state="expanded",
)

init_telemetry()

from views.dashboard import render_overview, render_placeholder  # noqa: E402
from views.module import render_module  # noqa: E402


def render_login() -> None:
    """Identify the user; all answers are stored under their email."""
    st.header("Diagnóstico do Mentor")
    with st.form("login"):
        name = st.text_input("Nome")
        email = st.text_input("E-mail")
        submitted = st.form_submit_button("Entrar", type="primary")
    if submitted:
        if not email.strip():
            st.error("Informe seu e-mail para continuar.")
            return
        dashboard = start_dashboard(st.session_state, name.strip(), email.strip().lower())
        # ?view=<menu id> deep-links straight into a module that is already started
        dashboard.entry_route(st.query_params.get("view", DashboardView.OVERVIEW.value))
        st.rerun()


def render_sidebar(dashboard) -> None:
    with st.sidebar:
        st.caption(dashboard.identity.email)
        for _key, title, items in MENU_SECTIONS:
            st.markdown(f"**{title}**")
            for view, label in items:
                active = dashboard.active_view is view
                if st.button(
                    label,
                    key=f"menu_{view.value}",
                    type="primary" if active else "secondary",
                    use_container_width=True,
                ):
                    selection = dashboard.select_menu_item(view)
                    if selection.blocked:
                        st.session_state["menu_message"] = selection.message
                    st.rerun()

        message = st.session_state.pop("menu_message", None)
        if message:
            st.warning(message)

        st.divider()
        if st.button("Sair", use_container_width=True):
            end_dashboard(st.session_state)
            st.rerun()


dashboard = get_dashboard(st.session_state)

if dashboard is None:
    render_login()
else:
    render_sidebar(dashboard)
    meta = get_module_registry().get_by_view(dashboard.active_view)
    if dashboard.active_view is DashboardView.OVERVIEW:
        render_overview(dashboard)
    elif meta is not None:
        render_module(dashboard, meta)
    else:
        render_placeholder(dashboard.active_view)
