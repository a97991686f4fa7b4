from typing import Optional

import streamlit as st
from loguru import logger

from config import settings
from domain.constants import ALL, DEFAULT_PROTOCOL_CATEGORY, PROTOCOL_CATEGORIES, PROTOCOL_CATEGORY_LABELS
from domain.models import Protocol
from domain.validation import ValidationError
from services import experiments as experiment_svc, protocols as protocol_svc
from services.backend import BackendError
from ui import session
from ui.components import category_badge, confirm_delete_prompt, metric_row, protocol_card, render_badges
from utils.dates import format_detail_datetime


def _render_list(backend, user_id: str, state):
    head, action = st.columns([4, 1])
    head.header("Protocols")
    head.caption("Standard operating procedures and experiment methods")
    if action.button("➕ New protocol", key="protocol_new"):
        state.create()
        st.rerun()

    try:
        protocols = protocol_svc.list_protocols(backend, user_id)
    except BackendError:
        logger.exception("Failed to load protocols")
        protocols = []

    stats = protocol_svc.protocol_stats(protocols, recent_days=settings.recent_days)
    metric_row([
        ("Total protocols", stats['total']),
        ("Categories", stats['categories']),
        (f"Added in {settings.recent_days} days", stats['recent']),
    ])

    c1, c2 = st.columns([3, 1])
    search = c1.text_input("Search", placeholder="Search title or description…", key="protocol_search")
    category = c2.selectbox("Category", [ALL] + PROTOCOL_CATEGORIES, key="protocol_category_filter",
                            format_func=lambda c: "All categories" if c == ALL else PROTOCOL_CATEGORY_LABELS[c])
    filtered = protocol_svc.filter_protocols(protocols, search, category)

    if not filtered:
        if search or category != ALL:
            st.info("No matching protocols. Try adjusting the search or the filter.")
        else:
            st.info("No protocols yet. Write down your first standard procedure.")
            if st.button("Create first protocol", key="protocol_first"):
                state.create()
                st.rerun()
        return

    cols = st.columns(2)
    for i, protocol in enumerate(filtered):
        with cols[i % 2]:
            action = protocol_card(protocol)
            if action == "view":
                state.view(protocol.id)
                st.rerun()
            elif action == "edit":
                state.edit(protocol.id)
                st.rerun()
            elif action == "delete":
                state.request_delete(protocol.id)
                st.rerun()
            if confirm_delete_prompt(state, protocol.id, protocol.title, key=f"protocol_del_{protocol.id}"):
                try:
                    protocol_svc.delete_protocol(backend, protocol.id)
                except BackendError:
                    logger.exception("Failed to delete protocol {}", protocol.id)
                    st.error("Delete failed, please retry.")
                else:
                    st.rerun()


def _render_form(backend, user_id: str, state, protocol: Optional[Protocol]):
    if st.button("← Back", key="protocol_form_back"):
        state.cancel()
        st.rerun()
    st.header("Edit protocol" if protocol else "New protocol")

    current = protocol.category if protocol and protocol.category in PROTOCOL_CATEGORIES else DEFAULT_PROTOCOL_CATEGORY
    with st.form(f"protocol_form_{protocol.id if protocol else 'new'}"):
        title = st.text_input("Title *", value=protocol.title if protocol else '', placeholder="e.g. PCR amplification")
        category = st.selectbox("Category", PROTOCOL_CATEGORIES, index=PROTOCOL_CATEGORIES.index(current),
                                format_func=lambda c: PROTOCOL_CATEGORY_LABELS[c])
        description = st.text_area("Description *", value=protocol.description if protocol else '', height=80,
                                   placeholder="Purpose and scope of the procedure…")
        content = st.text_area("Procedure *", value=protocol.content if protocol else '', height=320,
                               placeholder="1. Prepare reagents…\n2. …")
        submitted = st.form_submit_button("Update protocol" if protocol else "Create protocol", type="primary")

    if submitted:
        form = {'title': title, 'description': description, 'content': content, 'category': category}
        try:
            protocol_svc.save_protocol(backend, user_id, form, existing=protocol)
        except ValidationError as e:
            st.error(str(e))
        except BackendError:
            logger.exception("Failed to save protocol")
            st.error("Save failed, please retry.")
        else:
            state.saved()
            st.rerun()


def _render_detail(backend, user_id: str, state, protocol: Protocol):
    c1, c2 = st.columns([5, 1])
    if c1.button("← Back to protocols", key="protocol_detail_back"):
        state.back_to_list()
        st.rerun()
    if c2.button("✏️ Edit", key="protocol_detail_edit"):
        state.edit(protocol.id)
        st.rerun()

    st.header(protocol.title)
    render_badges(category_badge(protocol.category))
    st.write(protocol.description)

    try:
        usage = experiment_svc.count_using_protocol(
            experiment_svc.list_experiments(backend, user_id), protocol.id)
    except BackendError:
        logger.exception("Failed to count experiments for protocol {}", protocol.id)
        usage = 0
    metric_row([
        ("Used by experiments", usage),
        ("Created", format_detail_datetime(protocol.created_at)),
        ("Last updated", format_detail_datetime(protocol.updated_at)),
    ])

    st.subheader("Procedure")
    # st.code carries its own copy button
    st.code(protocol.content, language=None)


def view():
    backend = session.get_backend()
    user_id = session.current_user_id()
    state = session.manager('protocols')

    if state.mode == 'create':
        _render_form(backend, user_id, state, None)
        return
    if state.mode in ('edit', 'detail'):
        try:
            protocol = protocol_svc.get_protocol(backend, state.selected_id)
        except BackendError:
            logger.exception("Failed to load protocol {}", state.selected_id)
            protocol = None
        if protocol is None:
            st.warning("That protocol could not be found; it may have been deleted.")
            state.back_to_list()
        elif state.mode == 'edit':
            _render_form(backend, user_id, state, protocol)
            return
        else:
            _render_detail(backend, user_id, state, protocol)
            return
    _render_list(backend, user_id, state)
