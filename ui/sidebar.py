"""Streamlit sidebar component for configuration."""

import os
import streamlit as st

from core.config import initialize_session_state


def reset_session():
    """Drop results and validation state, keeping configuration."""
    for key in ('raw_content', 'questions', 'validation_error', 'source_name', 'request_id'):
        st.session_state.pop(key, None)
    initialize_session_state()


def render_sidebar():
    """Render the sidebar with API key, model and validation settings."""

    with st.sidebar:
        st.title("⚙️ Configuration")

        # API Key Section
        st.subheader("API Key")

        env_key = os.getenv('GEMINI_API_KEY')
        if env_key:
            fingerprint = f"***{env_key[-6:]}" if len(env_key) >= 6 else "***"
            st.success(f"Using key from .env: {fingerprint}")
            st.session_state.api_key = env_key
            st.session_state.api_key_valid = True
        else:
            api_key_input = st.text_input(
                "Gemini API Key",
                type="password",
                value=st.session_state.api_key,
                help="Only needed to generate new content. Pasted responses are validated offline.",
                placeholder="AIzaSy..."
            )

            if api_key_input:
                if api_key_input.startswith("AIza"):
                    st.success("API key format looks valid")
                    st.session_state.api_key = api_key_input
                    st.session_state.api_key_valid = True
                else:
                    st.error("Invalid API key format")
                    st.session_state.api_key_valid = False
            else:
                st.info("No API key: generation disabled, validation still works")
                st.session_state.api_key_valid = False

        st.markdown("---")

        # Model Configuration
        st.subheader("Model Settings")

        st.session_state.model_name = st.text_input("Model", value=st.session_state.model_name)

        st.session_state.temperature = st.slider(
            "Temperature",
            min_value=0.0,
            max_value=1.0,
            value=float(st.session_state.temperature),
            step=0.1,
            help="Lower values = more focused/deterministic"
        )

        st.session_state.max_tokens = st.select_slider(
            "Max Output Tokens",
            options=[2048, 4096, 8192],
            value=st.session_state.max_tokens if st.session_state.max_tokens in (2048, 4096, 8192) else 4096,
            help="Maximum number of tokens in the response"
        )

        st.markdown("---")

        # Validation Settings
        st.subheader("Validation")

        st.session_state.strict_mode = st.checkbox(
            "Strict mode",
            value=st.session_state.strict_mode,
            help="Reject malformed questions instead of repairing them"
        )

        st.markdown("---")

        if st.button("🗑️ Clear Results", use_container_width=True):
            reset_session()
            st.rerun()
