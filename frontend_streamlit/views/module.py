"""Module View - Step-by-step wizard for one diagnostic module.

Answers are edited as YAML; every applied edit goes through the module's
wizard, so gating, read-only handling and autosave all come from the engine.
"""

import streamlit as st
import yaml

from mentor_diagnosis.config import SaveStatus
from mentor_diagnosis.workflow import step_titles

SAVE_LABELS = {
    SaveStatus.IDLE: "",
    SaveStatus.SAVING: "Salvando...",
    SaveStatus.SAVED: "Salvo",
}


def _answers_yaml(session) -> str:
    data = session.answers.model_dump(mode="json")
    return yaml.safe_dump(data, allow_unicode=True, sort_keys=False)


def _apply_yaml(wizard, meta, text: str) -> str | None:
    """Push changed top-level fields through the wizard; returns an error message."""
    try:
        edited = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        return f"YAML inválido: {e}"
    if not isinstance(edited, dict):
        return "O conteúdo precisa ser um mapeamento de campos."

    current = wizard.session.answers.model_dump(mode="json")
    fields = list(edited)
    # The branch goes first: changing it clears the other branch's fields
    if meta.branch_field in edited:
        fields.remove(meta.branch_field)
        fields.insert(0, meta.branch_field)

    for name in fields:
        if name not in current:
            return f"Campo desconhecido: {name}"
        if edited[name] == current[name]:
            continue
        wizard.edit(name, edited[name])
        if wizard.last_error:
            return wizard.last_error
        current = wizard.session.answers.model_dump(mode="json")
    return None


def _render_completion(dashboard, wizard, titles: list[str]) -> None:
    session = wizard.session
    st.subheader("Revisão")
    for number, title in enumerate(titles, start=1):
        cols = st.columns([4, 1])
        cols[0].markdown(f"{number}. {title}")
        if cols[1].button("Editar", key=f"goto_{session.module.value}_{number}"):
            wizard.go_to(number)
            st.rerun()

    if not session.is_read_only:
        if st.button("Enviar para avaliação", type="primary"):
            dashboard.send_to_evaluation(session.module)
            st.rerun()


def render_module(dashboard, meta) -> None:
    wizard = dashboard.wizard(meta.module_id)
    session = wizard.session
    titles = step_titles(meta.module_id, session.answers)

    st.header(meta.display_name)
    status = SAVE_LABELS[dashboard.autosave(meta.module_id).status]
    if status:
        st.caption(status)
    if session.is_read_only:
        st.info("Este módulo foi enviado para avaliação e está disponível só para leitura.")

    if session.at_completion_view:
        _render_completion(dashboard, wizard, titles)
    else:
        st.subheader(f"Etapa {session.step} de {session.max_steps}: {titles[session.step - 1]}")

        text = st.text_area(
            "Respostas",
            value=_answers_yaml(session),
            height=420,
            key=f"answers_{meta.module_id.value}_{session.step}",
            disabled=session.is_read_only,
        )
        if not session.is_read_only and st.button("Aplicar"):
            error = _apply_yaml(wizard, meta, text)
            if error:
                st.error(error)
            else:
                st.rerun()

    cols = st.columns(3)
    if cols[0].button("Voltar", disabled=session.step <= 1):
        wizard.back()
        st.rerun()
    if not session.at_completion_view:
        if cols[1].button("Próximo", type="primary", disabled=not wizard.can_advance()):
            wizard.next()
            st.rerun()
    if cols[2].button("Salvar e sair"):
        dashboard.save_and_exit()
        st.rerun()
