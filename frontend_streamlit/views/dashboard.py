"""Dashboard View - Module cards with progress badges."""

import streamlit as st

from mentor_diagnosis.config import DashboardView
from mentor_diagnosis.workflow import get_module_registry, step_titles

BADGES = {
    "todo": ("⚪", "A fazer"),
    "started": ("🔵", "Em andamento"),
    "under_review": ("🟡", "Em avaliação"),
    "completed": ("✅", "Concluído"),
}


def _render_card(dashboard, meta) -> None:
    session = dashboard.session(meta.module_id)
    icon, label = BADGES[dashboard.module_badge(meta.module_id)]

    with st.container(border=True):
        st.markdown(f"**{meta.display_index}. {meta.display_name}**")
        st.caption(meta.description)
        st.markdown(f"{icon} {label}")

        if session.in_progress:
            titles = step_titles(meta.module_id, session.answers)
            done = min(session.step - 1, len(titles))
            st.progress(done / len(titles) if titles else 0.0)

        action = "Continuar" if dashboard.is_started(meta.module_id) else "Começar"
        if session.is_read_only:
            action = "Visualizar"
        if st.button(action, key=f"open_{meta.module_id.value}", use_container_width=True):
            if dashboard.open_module(meta.module_id) is None:
                st.session_state["menu_message"] = (
                    dashboard.select_menu_item(meta.view).message
                )
            st.rerun()


def render_overview(dashboard) -> None:
    st.header(f"Olá, {dashboard.identity.name or dashboard.identity.email}")

    if not dashboard.has_started_any():
        st.info("Comece pelo módulo 'O Mentor'. Os demais módulos são liberados em seguida.")

    modules = get_module_registry().all_modules()
    columns = st.columns(len(modules))
    for column, meta in zip(columns, modules, strict=True):
        with column:
            _render_card(dashboard, meta)


def render_placeholder(view: DashboardView) -> None:
    st.header(view.value.replace("_", " ").title())
    st.info("Em breve.")
