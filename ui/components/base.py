import html

import streamlit as st

from domain.constants import (
    STATUS_LABELS, PROTOCOL_CATEGORY_LABELS, DATA_TYPE_LABELS, CARD_NOTE_CATEGORY_LABELS,
)

GREEN = "#059669"  # emerald-600
BLUE = "#2563EB"  # blue-600
YELLOW = "#D97706"  # amber-600
GRAY = "#4B5563"  # gray-600
PURPLE = "#7C3AED"
ORANGE = "#EA580C"
RED = "#DC2626"
CHIP_BG = "#374151"

STATUS_COLORS = {
    "completed": GREEN,
    "in_progress": BLUE,
    "planning": YELLOW,
    "paused": GRAY,
}

CATEGORY_COLORS = {
    "molecular": BLUE,
    "cell": GREEN,
    "protein": PURPLE,
    "analytical": ORANGE,
}

DATA_TYPE_COLORS = {
    "temperature": RED,
    "ph": BLUE,
    "concentration": GREEN,
    "volume": PURPLE,
    "weight": YELLOW,
    "time": "#4F46E5",
    "count": "#DB2777",
    "percentage": ORANGE,
}


def inject_base_css():
    """Page-wide styles. Streamlit redraws from scratch each rerun, so app.main calls this every run."""
    st.markdown(
        f"""
        <style>
        .badge {{
            display:inline-block; padding:2px 8px; border-radius:12px;
            font-size:12px; line-height:16px; font-weight:600;
            background:{CHIP_BG}; color:#F9FAFB; margin-right:4px; margin-bottom:4px;
        }}
        .badge.outline {{background:transparent; color:inherit; border:1px solid #9CA3AF;}}
        .card-note {{border-left:4px solid; padding-left:10px;}}
        </style>
        """,
        unsafe_allow_html=True,
    )


def badge(text: str, color: str = CHIP_BG) -> str:
    return f'<span class="badge" style="background:{color};">{html.escape(str(text))}</span>'


def outline_badge(text: str) -> str:
    return f'<span class="badge outline">{html.escape(str(text))}</span>'


def status_badge(status: str) -> str:
    return badge(STATUS_LABELS.get(status, status), STATUS_COLORS.get(status, GRAY))


def category_badge(category: str) -> str:
    label = PROTOCOL_CATEGORY_LABELS.get(category, PROTOCOL_CATEGORY_LABELS["other"])
    return badge(label, CATEGORY_COLORS.get(category, GRAY))


def data_type_badge(data_type: str) -> str:
    return badge(DATA_TYPE_LABELS.get(data_type, data_type), DATA_TYPE_COLORS.get(data_type, GRAY))


def card_category_badge(category: str, color: str) -> str:
    return badge(CARD_NOTE_CATEGORY_LABELS.get(category, category), color)


def render_badges(*badges: str):
    st.markdown(" ".join(badges), unsafe_allow_html=True)


def metric_row(metrics):
    """Render ``[(label, value), ...]`` as one row of st.metric."""
    cols = st.columns(len(metrics))
    for (label, value), col in zip(metrics, cols):
        col.metric(label, value)


def confirm_delete_prompt(state, record_id: str, label: str, key: str) -> bool:
    """Second step of a delete: returns True once the user confirms.

    Only shown while ``record_id`` is the state's pending delete.
    """
    if state.pending_delete != record_id:
        return False
    st.warning(f'Delete "{label}"? This cannot be undone.')
    c1, c2 = st.columns(2)
    if c1.button("Delete", key=f"{key}_confirm", type="primary"):
        return state.confirm_delete() == record_id
    if c2.button("Cancel", key=f"{key}_cancel"):
        state.cancel_delete()
        st.rerun()
    return False
