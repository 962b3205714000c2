"""Common UI components and utilities."""

import streamlit as st


def render_header():
    """Render the application header."""
    st.title("Quiz Content Inspector")
    st.markdown("""
    <div style='text-align: center; padding: 1rem 0; color: #666;'>
        Turn raw Gemini responses into validated multiple-choice quiz questions
    </div>
    """, unsafe_allow_html=True)

    # Quick stats if results exist
    questions = st.session_state.get('questions')
    if isinstance(questions, list):
        col1, col2, col3 = st.columns(3)

        with col1:
            st.metric("Questions", len(questions))
        with col2:
            st.metric("Mode", "Strict" if st.session_state.strict_mode else "Lenient")
        with col3:
            st.metric("Source", st.session_state.source_name or "N/A")

    st.divider()


def render_footer():
    """Render the application footer."""
    st.divider()
    st.markdown("""
    <div style='text-align: center; color: #999; padding: 2rem 0;'>
        <p>Made with Streamlit and Google Gemini AI</p>
    </div>
    """, unsafe_allow_html=True)


def load_css():
    """Load custom CSS styles."""
    st.markdown("""
    <style>
        h1 {
            color: #1f77b4;
            font-weight: 600;
        }

        .stButton button {
            border-radius: 6px;
            font-weight: 500;
        }

        .stTextArea textarea {
            font-family: monospace;
        }

        .stMetric {
            background-color: #f8f9fa;
            padding: 1rem;
            border-radius: 8px;
        }
    </style>
    """, unsafe_allow_html=True)
