import html
from typing import Optional

import streamlit as st

from domain.constants import STATUS_ICONS
from domain.models import CardNote, Experiment, ExperimentData, Note, Protocol
from services.card_notes import display_color, visible_tags
from utils.dates import format_detail_datetime, format_list_date, format_short_date

from .base import (
    status_badge, category_badge, data_type_badge, card_category_badge, outline_badge,
)


def _actions(key: str, *names: str) -> Optional[str]:
    """Row of small buttons; returns the name of the one clicked."""
    labels = {"view": "👁️", "edit": "✏️", "delete": "🗑️", "favorite": "☆", "unfavorite": "★"}
    cols = st.columns(len(names))
    for name, col in zip(names, cols):
        if col.button(labels.get(name, name), key=f"{key}_{name}", help=name.capitalize()):
            return name
    return None


def experiment_card(exp: Experiment) -> Optional[str]:
    """One experiment row. Returns 'view' | 'edit' | 'delete' when clicked."""
    with st.container(border=True):
        main, actions = st.columns([5, 1])
        with main:
            icon = STATUS_ICONS.get(exp.status, "🧪")
            st.markdown(f"{icon} **{html.escape(exp.title)}** {status_badge(exp.status)}",
                        unsafe_allow_html=True)
            st.caption(exp.description[:200] + ('…' if len(exp.description) > 200 else ''))
            dates = [f"Start: {format_short_date(exp.start_date)}"]
            if exp.end_date:
                dates.append(f"End: {format_short_date(exp.end_date)}")
            dates.append(f"Created: {format_short_date(exp.created_at)}")
            st.caption(" · ".join(dates))
        with actions:
            return _actions(f"exp_{exp.id}", "view", "edit", "delete")


def protocol_card(protocol: Protocol) -> Optional[str]:
    with st.container(border=True):
        st.markdown(f"**{html.escape(protocol.title)}** {category_badge(protocol.category)}",
                    unsafe_allow_html=True)
        st.caption(protocol.description)
        st.caption(f"Created: {format_short_date(protocol.created_at)}")
        return _actions(f"protocol_{protocol.id}", "view", "edit", "delete")


def card_note_card(note: CardNote) -> Optional[str]:
    """Colored note card. Returns 'favorite' | 'unfavorite' | 'edit' | 'delete'."""
    shown, hidden = visible_tags(note.tags)
    color = display_color(note.color)
    tag_html = " ".join(outline_badge(t) for t in shown)
    if hidden:
        tag_html += " " + outline_badge(f"+{hidden}")
    with st.container(border=True):
        st.markdown(
            f"""
            <div class="card-note" style="border-color:{color};">
                <div style="font-weight:600;">{html.escape(note.title)}</div>
                <div>{card_category_badge(note.category, color)}</div>
                <div style="white-space:pre-wrap; font-size:0.9rem; margin:6px 0;">{html.escape(note.content[:300])}</div>
                <div>{tag_html}</div>
            </div>
            """,
            unsafe_allow_html=True,
        )
        star = "unfavorite" if note.is_favorite else "favorite"
        return _actions(f"card_{note.id}", star, "edit", "delete")


def data_row(record: ExperimentData) -> Optional[str]:
    with st.container(border=True):
        main, actions = st.columns([5, 1])
        with main:
            unit = f" {html.escape(record.measurement_unit)}" if record.measurement_unit else ""
            st.markdown(
                f"{data_type_badge(record.data_type)} **{html.escape(record.data_value)}**{unit}",
                unsafe_allow_html=True)
            st.caption(format_detail_datetime(record.timestamp))
        with actions:
            return _actions(f"data_{record.id}", "edit", "delete")


def note_row(note: Note) -> Optional[str]:
    with st.container(border=True):
        main, actions = st.columns([5, 1])
        with main:
            st.markdown(f"**{html.escape(note.title)}**")
            st.markdown(note.content)
            if note.tags:
                st.markdown(" ".join(outline_badge(t) for t in note.tags), unsafe_allow_html=True)
            st.caption(f"Updated {format_list_date(note.updated_at)}")
        with actions:
            return _actions(f"note_{note.id}", "edit", "delete")
