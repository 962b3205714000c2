"""Input section UI: paste, upload or generate raw model output."""

from typing import List, Optional, Tuple

import streamlit as st

from core.config import GeminiConfig, load_gemini_config
from core.errors import GeminiRequestError, InvalidGeneratedContentError
from core.logging_utils import get_logger, looks_like_auth_error
from extraction.gemini import construct_prompt, generate_content, load_existing_questions, load_question_format
from processor import validate_generated_content

LOGGER = get_logger()


def run_validation(raw: str, strict: bool) -> Tuple[Optional[List[dict]], Optional[str]]:
    """Validate raw content, returning (questions, error_message)."""
    try:
        return validate_generated_content(raw, strict=strict), None
    except InvalidGeneratedContentError as e:
        return None, str(e)


def _store_result(raw: str, source_name: str) -> None:
    questions, error = run_validation(raw, st.session_state.strict_mode)
    st.session_state.raw_content = raw
    st.session_state.source_name = source_name
    st.session_state.questions = questions
    st.session_state.validation_error = error


def _session_config() -> GeminiConfig:
    base = load_gemini_config(api_key=st.session_state.api_key)
    return GeminiConfig(
        api_key=base.api_key,
        model_name=st.session_state.model_name or base.model_name,
        temperature=float(st.session_state.temperature),
        max_output_tokens=int(st.session_state.max_tokens),
        max_retries=base.max_retries,
        retry_delay=base.retry_delay,
    )


def _render_generate_tab() -> None:
    if not st.session_state.api_key_valid:
        st.warning("Add a Gemini API key in the sidebar to generate content.")
        return

    col1, col2 = st.columns(2)
    with col1:
        st.session_state.topic = st.text_input("Topic", value=st.session_state.topic)
        st.session_state.language = st.text_input("Programming language", value=st.session_state.language)
    with col2:
        st.session_state.difficulty_text = st.text_input(
            "Difficulty description", value=st.session_state.difficulty_text
        )
        st.session_state.existing_questions_path = st.text_input(
            "Existing questions file",
            value=st.session_state.existing_questions_path,
            help="Optional text file with one question per line to avoid duplicates",
        )

    if st.button("✨ Generate with Gemini", type="primary", use_container_width=True):
        try:
            prompt = construct_prompt(
                load_question_format(),
                load_existing_questions(st.session_state.existing_questions_path or None),
                topic=st.session_state.topic or None,
                language=st.session_state.language or None,
                difficulty_text=st.session_state.difficulty_text or None,
            )
            with st.spinner("Waiting for Gemini..."):
                raw = generate_content(prompt, _session_config())
        except (ValueError, GeminiRequestError) as e:
            LOGGER.error("Generation failed: %s", e)
            if looks_like_auth_error(str(e)):
                st.error("Gemini rejected the API key. Check the key in the sidebar.")
            else:
                st.error(f"Generation failed: {e}")
            return
        _store_result(raw, "Gemini")


def render_upload_section():
    """Render the raw content input section."""

    st.header("📥 Model Output")

    paste_tab, upload_tab, generate_tab = st.tabs(["Paste", "Upload", "Generate"])

    with paste_tab:
        raw = st.text_area(
            "Raw model response",
            value=st.session_state.raw_content,
            height=300,
            help="Paste the text exactly as the model returned it, prose and code fences included.",
        )
        if st.button("🔍 Validate", type="primary", use_container_width=True, key="validate_pasted"):
            _store_result(raw, "Pasted text")

    with upload_tab:
        uploaded_file = st.file_uploader(
            "Choose a response file",
            type=['txt', 'json', 'md', 'log'],
            label_visibility="collapsed"
        )
        if uploaded_file and st.button("🔍 Validate File", use_container_width=True):
            raw = uploaded_file.getvalue().decode('utf-8', errors='replace')
            _store_result(raw, uploaded_file.name)

    with generate_tab:
        _render_generate_tab()
