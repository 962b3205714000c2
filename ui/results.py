"""Results section UI listing validated questions or the validation error."""

import json

import streamlit as st


def render_results_section():
    """Render validated questions, or the error that stopped validation."""

    st.header("📊 Validation Results")

    error = st.session_state.get('validation_error')
    if error:
        st.error(error)
        st.caption("Switch off strict mode in the sidebar to let repairable questions through.")
        return

    questions = st.session_state.get('questions') or []
    st.metric("Questions", len(questions))
    st.markdown("---")

    for idx, question in enumerate(questions, 1):
        header = f"Q{idx}: {question.get('question', 'N/A')}"
        with st.expander(header, expanded=idx == 1):
            st.caption(f"{question.get('category')} · {question.get('difficulty')}")
            for opt_idx, option in enumerate(question.get('options', [])):
                icon = "✅" if opt_idx == question.get('correctAnswer') else "⭕"
                st.markdown(f"{icon} {option}")
                if "(placeholder)" in option:
                    st.caption("Placeholder added during validation")
            st.caption(f"💡 {question.get('explanation')}")

    with st.expander("Validated JSON"):
        st.code(json.dumps(questions, indent=2), language="json")
