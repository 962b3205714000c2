"""Export section UI for downloading validated questions."""

import json
from datetime import datetime
from typing import Any, Dict, List

import streamlit as st
import pandas as pd


def questions_to_frame(questions: List[Dict[str, Any]]) -> pd.DataFrame:
    """Flatten question records into one row per question."""
    rows = []
    for q in questions:
        options = q.get('options', [])
        correct = q.get('correctAnswer', 0)
        rows.append({
            'Question': q.get('question', ''),
            'Option A': options[0] if len(options) > 0 else '',
            'Option B': options[1] if len(options) > 1 else '',
            'Option C': options[2] if len(options) > 2 else '',
            'Option D': options[3] if len(options) > 3 else '',
            'Correct': "ABCD"[correct] if isinstance(correct, int) and 0 <= correct < 4 else '',
            'Explanation': q.get('explanation', ''),
            'Difficulty': q.get('difficulty', ''),
            'Category': q.get('category', ''),
        })
    return pd.DataFrame(rows)


def render_export_section():
    """Render the export section with download options."""

    questions = st.session_state.get('questions')
    if not questions:
        return

    st.header("💾 Export Results")
    ts = datetime.now().strftime('%Y%m%d_%H%M%S')

    col1, col2 = st.columns(2)

    with col1:
        st.subheader("JSON Format")
        st.download_button(
            label="Download JSON",
            data=json.dumps(questions, indent=2),
            file_name=f"questions_{ts}.json",
            mime="application/json",
            use_container_width=True
        )

    with col2:
        st.subheader("CSV Format")
        st.download_button(
            label="Download CSV",
            data=questions_to_frame(questions).to_csv(index=False),
            file_name=f"questions_{ts}.csv",
            mime="text/csv",
            use_container_width=True
        )
