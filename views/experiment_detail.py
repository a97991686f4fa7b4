"""
Experiment detail: overview cards plus the Data, Notes and Protocol tabs.

The Data and Notes tabs each carry their own small list/create/edit switch
(kept in session state per experiment) so that adding a measurement does not
leave the experiment.
"""
import datetime as dt
from typing import Optional

import streamlit as st
from loguru import logger

from domain.constants import ALL, DATA_TYPES, DATA_TYPE_LABELS, STATUS_ICONS, STATUS_LABELS
from domain.models import Experiment, ExperimentData, Note
from domain.validation import ValidationError
from services import experiment_data as data_svc, notes as note_svc, protocols as protocol_svc
from services.backend import BackendError
from ui import session
from ui.components import (
    category_badge, confirm_delete_prompt, data_row, metric_row, note_row, render_badges, status_badge,
    tag_editor, reset_tag_editor,
)
from utils.dates import duration_days, format_detail_date, format_detail_datetime, format_list_date, safe_date
from utils.tags import unique_tags


def overview_metrics(exp: Experiment, record_count: int):
    return [
        ("Start date", format_detail_date(exp.start_date)),
        ("End date", format_detail_date(exp.end_date) if exp.end_date else "Not set"),
        ("Duration", f"{duration_days(exp.start_date, exp.end_date)} days"),
        ("Data records", record_count),
    ]


def render(backend, user_id: str, state, exp: Experiment):
    top_l, top_r = st.columns([5, 1])
    if top_l.button("← Back to experiments", key="exp_detail_back"):
        state.back_to_list()
        st.rerun()
    if top_r.button("✏️ Edit experiment", key="exp_detail_edit"):
        state.edit(exp.id)
        st.rerun()

    st.header(f"{STATUS_ICONS.get(exp.status, '🧪')} {exp.title}")
    render_badges(status_badge(exp.status))

    try:
        records = data_svc.list_data(backend, exp.id)
        notes = note_svc.list_notes(backend, exp.id)
    except BackendError:
        logger.exception("Failed to load experiment details for {}", exp.id)
        records, notes = [], []

    metric_row(overview_metrics(exp, len(records)))

    overview_tab, data_tab, notes_tab, protocol_tab = st.tabs(
        ["Overview", "Data", "Notes", "Protocol"])
    with overview_tab:
        _render_overview(exp)
    with data_tab:
        _render_data(backend, user_id, exp, records)
    with notes_tab:
        _render_notes(backend, user_id, exp, notes)
    with protocol_tab:
        _render_protocol(backend, exp)


def _render_overview(exp: Experiment):
    st.subheader("Description")
    st.write(exp.description)
    c1, c2 = st.columns(2)
    with c1:
        st.markdown("**Details**")
        st.write(f"Status: {STATUS_LABELS.get(exp.status, exp.status)}")
        st.write(f"Created: {format_detail_datetime(exp.created_at)}")
        st.write(f"Updated: {format_detail_datetime(exp.updated_at)}")
    with c2:
        st.markdown("**Links**")
        st.write(f"Experiment id: `{exp.id}`")
        st.write(f"Protocol id: `{exp.protocol_id}`" if exp.protocol_id else "No linked protocol")


# --- Data tab ---

def _render_data_form(backend, user_id: str, exp: Experiment, state, record: Optional[ExperimentData]):
    st.subheader("Edit data" if record else "Add data")
    key = f"data_form_{exp.id}_{record.id if record else 'new'}"
    # type lives outside the form so the unit list follows it (and resets) immediately
    type_key = f"{key}_type"
    if type_key not in st.session_state:
        st.session_state[type_key] = record.data_type if record else DATA_TYPES[0]
    data_type = st.selectbox("Data type *", DATA_TYPES, key=type_key,
                             format_func=lambda t: DATA_TYPE_LABELS[t])
    # switching type drops the stored unit; it belongs to the old type
    current_unit = record.measurement_unit if record and record.data_type == data_type else None
    units, unit_index = data_svc.unit_choices(data_type, current_unit)
    stamp = (safe_date(record.timestamp) if record else None) or dt.datetime.now()

    with st.form(key):
        data_value = st.text_input("Value *", value=record.data_value if record else '')
        unit = None
        if len(units) > 1:
            unit = st.selectbox("Unit", units, index=unit_index, key=f"{key}_unit_{data_type}",
                                format_func=lambda u: "No unit" if u is None else u)
        c1, c2 = st.columns(2)
        day = c1.date_input("Date *", value=stamp.date())
        at = c2.time_input("Time", value=stamp.time().replace(second=0, microsecond=0, tzinfo=None))
        c3, c4 = st.columns(2)
        submitted = c3.form_submit_button("Update" if record else "Add", type="primary")
        cancelled = c4.form_submit_button("Cancel")

    if cancelled:
        st.session_state.pop(type_key, None)
        state.cancel()
        st.rerun()
    if submitted:
        form = {
            'data_type': data_type,
            'data_value': data_value.strip(),
            'measurement_unit': unit,
            'timestamp': dt.datetime.combine(day, at),
        }
        try:
            data_svc.save_data(backend, user_id, exp.id, form, existing=record)
        except ValidationError as e:
            st.error(str(e))
        except BackendError:
            logger.exception("Failed to save experiment data")
            st.error("Save failed, please retry.")
        else:
            st.session_state.pop(type_key, None)
            state.saved()
            st.rerun()


def _render_data(backend, user_id: str, exp: Experiment, records):
    state = session.manager(f"data_{exp.id}")
    stats = data_svc.data_stats(records)
    metric_row([
        ("Total records", stats['total']),
        ("Data types", stats['types']),
        ("Latest", format_list_date(stats['latest'].timestamp) if stats['latest'] else "No record"),
    ])

    if state.mode in ('create', 'edit'):
        record = None
        if state.mode == 'edit':
            record = next((r for r in records if r.id == state.selected_id), None)
            if record is None:
                state.back_to_list()
                st.rerun()
        _render_data_form(backend, user_id, exp, state, record)
        return

    c1, c2, c3 = st.columns([2, 1, 1])
    types = data_svc.present_types(records)
    filter_type = c1.selectbox(
        "Type", [ALL] + types, key=f"data_filter_{exp.id}",
        format_func=lambda t: "All types" if t == ALL else DATA_TYPE_LABELS.get(t, t))
    if c2.button("➕ Add data", key=f"data_add_{exp.id}"):
        state.create()
        st.rerun()
    filtered = data_svc.filter_data(records, filter_type)
    c3.download_button("CSV", data=data_svc.to_csv(filtered), file_name=f"{exp.id}_data.csv",
                       mime="text/csv", key=f"data_csv_{exp.id}", disabled=not filtered)

    if not filtered:
        if filter_type == ALL:
            st.info("No experiment data yet. Start by recording your first measurement.")
        else:
            st.info(f"No {DATA_TYPE_LABELS.get(filter_type, filter_type)} data. Try another type or add new data.")
        return

    for record in filtered:
        action = data_row(record)
        if action == "edit":
            state.edit(record.id)
            st.rerun()
        elif action == "delete":
            state.request_delete(record.id)
            st.rerun()
        if confirm_delete_prompt(state, record.id, "this data record", key=f"data_del_{record.id}"):
            try:
                data_svc.delete_data(backend, record.id)
            except BackendError:
                logger.exception("Failed to delete data record {}", record.id)
                st.error("Delete failed, please retry.")
            else:
                st.rerun()


# --- Notes tab ---

def _render_note_form(backend, user_id: str, exp: Experiment, state, note: Optional[Note]):
    st.subheader("Edit note" if note else "Add note")
    key = f"note_form_{exp.id}_{note.id if note else 'new'}"
    tags = tag_editor(key, note.tags if note else [])
    with st.form(key):
        title = st.text_input("Title *", value=note.title if note else '', placeholder="Note title")
        content = st.text_area("Content *", value=note.content if note else '', height=200)
        c1, c2 = st.columns(2)
        submitted = c1.form_submit_button("Update" if note else "Add", type="primary")
        cancelled = c2.form_submit_button("Cancel")

    if cancelled:
        reset_tag_editor(key)
        state.cancel()
        st.rerun()
    if submitted:
        try:
            note_svc.save_note(backend, user_id, exp.id,
                               {'title': title, 'content': content, 'tags': tags}, existing=note)
        except ValidationError as e:
            st.error(str(e))
        except BackendError:
            logger.exception("Failed to save note")
            st.error("Save failed, please retry.")
        else:
            reset_tag_editor(key)
            state.saved()
            st.rerun()


def _render_notes(backend, user_id: str, exp: Experiment, notes):
    state = session.manager(f"notes_{exp.id}")
    stats = note_svc.note_stats(notes)
    metric_row([
        ("Notes", stats['total']),
        ("Tags", stats['tags']),
        ("Latest", format_list_date(stats['latest'].created_at) if stats['latest'] else "No record"),
    ])

    if state.mode in ('create', 'edit'):
        note = None
        if state.mode == 'edit':
            note = next((n for n in notes if n.id == state.selected_id), None)
            if note is None:
                state.back_to_list()
                st.rerun()
        _render_note_form(backend, user_id, exp, state, note)
        return

    c1, c2, c3 = st.columns([2, 1, 1])
    search = c1.text_input("Search notes", key=f"note_search_{exp.id}", placeholder="Title or content…")
    tag = c2.selectbox("Tag", [ALL] + unique_tags(n.tags for n in notes), key=f"note_tag_{exp.id}",
                       format_func=lambda t: "All tags" if t == ALL else t)
    if c3.button("➕ Add note", key=f"note_add_{exp.id}"):
        state.create()
        st.rerun()

    filtered = note_svc.filter_notes(notes, search, tag)
    if not filtered:
        st.info("No matching notes." if (search or tag != ALL) else "No notes for this experiment yet.")
        return
    for note in filtered:
        action = note_row(note)
        if action == "edit":
            state.edit(note.id)
            st.rerun()
        elif action == "delete":
            state.request_delete(note.id)
            st.rerun()
        if confirm_delete_prompt(state, note.id, note.title, key=f"note_del_{note.id}"):
            try:
                note_svc.delete_note(backend, note.id)
            except BackendError:
                logger.exception("Failed to delete note {}", note.id)
                st.error("Delete failed, please retry.")
            else:
                st.rerun()


# --- Protocol tab ---

def _render_protocol(backend, exp: Experiment):
    if not exp.protocol_id:
        st.info("No protocol is linked to this experiment. Edit the experiment to link one.")
        return
    try:
        protocol = protocol_svc.get_protocol(backend, exp.protocol_id)
    except BackendError:
        logger.exception("Failed to load protocol {}", exp.protocol_id)
        protocol = None
    if protocol is None:
        st.markdown(f"Linked protocol: `{exp.protocol_id}`")
        st.caption("The protocol record is no longer available.")
        return
    st.subheader(protocol.title)
    render_badges(category_badge(protocol.category))
    st.write(protocol.description)
    st.code(protocol.content, language=None)
    if st.button("Open protocol", key=f"exp_open_protocol_{exp.id}"):
        session.navigate('protocols', protocol.id)
        st.rerun()
