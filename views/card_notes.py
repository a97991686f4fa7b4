"""
Notes page: standalone card notes with category, colour, tags and a favourite
star. Unlike experiments and protocols there is no detail view; a card opens
straight into its edit form.
"""
from typing import Optional

import streamlit as st
from loguru import logger

from domain.constants import (
    ALL, CARD_NOTE_CATEGORIES, CARD_NOTE_CATEGORY_LABELS, CARD_NOTE_COLORS, DEFAULT_CARD_NOTE_CATEGORY,
    DEFAULT_CARD_NOTE_COLOR,
)
from domain.models import CardNote
from domain.validation import ValidationError
from services import card_notes as card_note_svc
from services.backend import BackendError
from ui import session
from ui.components import card_note_card, confirm_delete_prompt, metric_row, reset_tag_editor, tag_editor

COLOR_OPTIONS = list(CARD_NOTE_COLORS)


def _render_list(backend, user_id: str, state):
    head, action = st.columns([4, 1])
    head.header("Notes")
    head.caption("Ideas, references and observations outside a single experiment")
    if action.button("➕ New note", key="card_new"):
        state.create()
        st.rerun()

    try:
        notes = card_note_svc.list_card_notes(backend, user_id)
    except BackendError:
        logger.exception("Failed to load card notes")
        notes = []

    stats = card_note_svc.card_note_stats(notes)
    metric_row([
        ("Total notes", stats['total']),
        ("Favourites", stats['favorites']),
        ("Categories", stats['categories']),
        ("Tags", stats['tags']),
    ])

    c1, c2, c3 = st.columns([3, 1, 1])
    search = c1.text_input("Search", placeholder="Title, content or tag…", key="card_search")
    category = c2.selectbox("Category", [ALL] + CARD_NOTE_CATEGORIES, key="card_category_filter",
                            format_func=lambda c: "All categories" if c == ALL else CARD_NOTE_CATEGORY_LABELS[c])
    favorites_only = c3.toggle("Favourites only", key="card_favorites_only")
    filtered = card_note_svc.filter_card_notes(notes, search, category, favorites_only)

    if not filtered:
        if search or category != ALL or favorites_only:
            st.info("No matching notes. Try adjusting the search or the filters.")
        else:
            st.info("No notes yet. Capture your first idea.")
        return

    cols = st.columns(3)
    for i, note in enumerate(filtered):
        with cols[i % 3]:
            action = card_note_card(note)
            if action in ("favorite", "unfavorite"):
                try:
                    card_note_svc.toggle_favorite(backend, note)
                except BackendError:
                    logger.exception("Failed to toggle favourite on {}", note.id)
                    st.error("Save failed, please retry.")
                else:
                    st.rerun()
            elif action == "edit":
                state.edit(note.id)
                st.rerun()
            elif action == "delete":
                state.request_delete(note.id)
                st.rerun()
            if confirm_delete_prompt(state, note.id, note.title, key=f"card_del_{note.id}"):
                try:
                    card_note_svc.delete_card_note(backend, note.id)
                except BackendError:
                    logger.exception("Failed to delete card note {}", note.id)
                    st.error("Delete failed, please retry.")
                else:
                    st.rerun()


def _render_form(backend, user_id: str, state, note: Optional[CardNote]):
    if st.button("← Back", key="card_form_back"):
        reset_tag_editor(f"card_form_{note.id if note else 'new'}")
        state.cancel()
        st.rerun()
    st.header("Edit note" if note else "New note")

    key = f"card_form_{note.id if note else 'new'}"
    tags = tag_editor(key, note.tags if note else [])
    category = note.category if note and note.category in CARD_NOTE_CATEGORIES else DEFAULT_CARD_NOTE_CATEGORY
    color = note.color if note and note.color in CARD_NOTE_COLORS else DEFAULT_CARD_NOTE_COLOR

    with st.form(key):
        title = st.text_input("Title *", value=note.title if note else '', placeholder="Note title")
        content = st.text_area("Content *", value=note.content if note else '', height=220)
        c1, c2, c3 = st.columns(3)
        category = c1.selectbox("Category", CARD_NOTE_CATEGORIES, index=CARD_NOTE_CATEGORIES.index(category),
                                format_func=lambda c: CARD_NOTE_CATEGORY_LABELS[c])
        color = c2.selectbox("Colour", COLOR_OPTIONS, index=COLOR_OPTIONS.index(color),
                             format_func=lambda c: CARD_NOTE_COLORS[c])
        is_favorite = c3.checkbox("Favourite", value=note.is_favorite if note else False)
        submitted = st.form_submit_button("Update note" if note else "Create note", type="primary")

    if submitted:
        form = {
            'title': title,
            'content': content,
            'category': category,
            'color': color,
            'tags': tags,
            'is_favorite': is_favorite,
        }
        try:
            card_note_svc.save_card_note(backend, user_id, form, existing=note)
        except ValidationError as e:
            st.error(str(e))
        except BackendError:
            logger.exception("Failed to save card note")
            st.error("Save failed, please retry.")
        else:
            reset_tag_editor(key)
            state.saved()
            st.rerun()


def view():
    backend = session.get_backend()
    user_id = session.current_user_id()
    state = session.manager('notes')

    if state.mode == 'create':
        _render_form(backend, user_id, state, None)
        return
    if state.mode in ('edit', 'detail'):
        try:
            note = card_note_svc.get_card_note(backend, state.selected_id)
        except BackendError:
            logger.exception("Failed to load card note {}", state.selected_id)
            note = None
        if note is not None:
            _render_form(backend, user_id, state, note)
            return
        st.warning("That note could not be found; it may have been deleted.")
        state.back_to_list()
    _render_list(backend, user_id, state)
