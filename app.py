"""
Quiz Content Inspector - validate generative model output as quiz questions
Paste, upload or generate a Gemini response and see the validated question records
"""

import streamlit as st

from core.config import initialize_session_state
from ui.components import load_css, render_footer, render_header
from ui.export import render_export_section
from ui.results import render_results_section
from ui.sidebar import render_sidebar
from ui.upload import render_upload_section

# Page Configuration - MUST be the first Streamlit command
st.set_page_config(
    page_title="Quiz Content Inspector",
    page_icon="⬜",
    layout="wide",
    initial_sidebar_state="expanded",
)


def main():
    """Main application entry point"""
    initialize_session_state()
    load_css()

    render_sidebar()
    render_header()

    render_upload_section()

    if st.session_state.get('questions') or st.session_state.get('validation_error'):
        render_results_section()
    if st.session_state.get('questions'):
        render_export_section()

    render_footer()


if __name__ == "__main__":
    main()
