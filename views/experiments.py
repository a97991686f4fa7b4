import datetime as dt
from typing import Optional

import streamlit as st
from loguru import logger

from domain.constants import ALL, EXPERIMENT_STATUSES, STATUS_LABELS
from domain.models import Experiment
from domain.validation import ValidationError
from services import experiments as experiment_svc, protocols as protocol_svc
from services.backend import BackendError
from ui import session
from ui.components import experiment_card, confirm_delete_prompt
from utils.dates import safe_date
from views import experiment_detail


def _load_selected(backend, state) -> Optional[Experiment]:
    try:
        exp = experiment_svc.get_experiment(backend, state.selected_id)
    except BackendError:
        logger.exception("Failed to load experiment {}", state.selected_id)
        exp = None
    if exp is None:
        st.warning("That experiment could not be found; it may have been deleted.")
        state.back_to_list()
    return exp


def _render_list(backend, user_id: str, state):
    head, action = st.columns([4, 1])
    head.header("Experiments")
    head.caption("Manage your experiment records and data")
    if action.button("➕ New experiment", key="exp_new"):
        state.create()
        st.rerun()

    try:
        experiments = experiment_svc.list_experiments(backend, user_id)
    except BackendError:
        logger.exception("Failed to load experiments")
        experiments = []

    c1, c2 = st.columns([3, 1])
    search = c1.text_input("Search", placeholder="Search title or description…", key="exp_search")
    status = c2.selectbox("Status", [ALL] + EXPERIMENT_STATUSES, key="exp_status_filter",
                          format_func=lambda s: "All statuses" if s == ALL else STATUS_LABELS[s])
    filtered = experiment_svc.filter_experiments(experiments, search, status)

    if not filtered:
        if search or status != ALL:
            st.info("No matching experiments. Try adjusting the search or the filter.")
        else:
            st.info("No experiments yet. Create your first experiment record to get started.")
            if st.button("Create first experiment", key="exp_first"):
                state.create()
                st.rerun()
        return

    for exp in filtered:
        action = experiment_card(exp)
        if action == "view":
            state.view(exp.id)
            st.rerun()
        elif action == "edit":
            state.edit(exp.id)
            st.rerun()
        elif action == "delete":
            state.request_delete(exp.id)
            st.rerun()
        if confirm_delete_prompt(state, exp.id, exp.title, key=f"exp_del_{exp.id}"):
            try:
                experiment_svc.delete_experiment(backend, exp.id)
            except BackendError:
                logger.exception("Failed to delete experiment {}", exp.id)
                st.error("Delete failed, please retry.")
            else:
                st.rerun()


def _render_form(backend, user_id: str, state, exp: Optional[Experiment]):
    if st.button("← Back", key="exp_form_back"):
        state.cancel()
        st.rerun()
    st.header("Edit experiment" if exp else "New experiment")
    st.caption("Update experiment details and settings" if exp else "Create a new experiment record")

    try:
        protocols = protocol_svc.list_protocol_choices(backend, user_id)
    except BackendError:
        logger.exception("Failed to load protocols")
        protocols = []
    protocol_titles = {p.id: p.title for p in protocols}
    protocol_options = [''] + list(protocol_titles)
    current_protocol = exp.protocol_id if exp and exp.protocol_id else ''
    if current_protocol and current_protocol not in protocol_titles:
        # keep a dangling reference selectable rather than silently dropping it
        protocol_options.append(current_protocol)

    start_default = (safe_date(exp.start_date) if exp else None) or dt.datetime.now()
    end_default = safe_date(exp.end_date) if exp and exp.end_date else None
    key = f"exp_form_{exp.id if exp else 'new'}"

    with st.form(key):
        title = st.text_input("Title *", value=exp.title if exp else '', placeholder="Experiment title…")
        description = st.text_area("Description *", value=exp.description if exp else '', height=120,
                                   placeholder="Purpose, method and expected results…")
        c1, c2, c3 = st.columns(3)
        status = c1.selectbox("Status", EXPERIMENT_STATUSES,
                              index=EXPERIMENT_STATUSES.index(exp.status) if exp and exp.status in EXPERIMENT_STATUSES else 0,
                              format_func=lambda s: STATUS_LABELS[s])
        start_date = c2.date_input("Start date *", value=start_default.date())
        end_date = c3.date_input("End date (optional)", value=end_default.date() if end_default else None)
        protocol_id = st.selectbox(
            "Linked protocol (optional)", protocol_options,
            index=protocol_options.index(current_protocol),
            format_func=lambda pid: "No protocol" if not pid else protocol_titles.get(pid, pid))
        submitted = st.form_submit_button("Update experiment" if exp else "Create experiment", type="primary")

    if submitted:
        form = {
            'title': title,
            'description': description,
            'status': status,
            'start_date': start_date,
            'end_date': end_date,
            'protocol_id': protocol_id,
        }
        try:
            experiment_svc.save_experiment(backend, user_id, form, existing=exp)
        except ValidationError as e:
            st.error(str(e))
        except BackendError:
            logger.exception("Failed to save experiment")
            st.error("Save failed, please retry.")
        else:
            state.saved()
            st.rerun()


def view():
    backend = session.get_backend()
    user_id = session.current_user_id()
    state = session.manager('experiments')

    if state.mode == 'create':
        _render_form(backend, user_id, state, None)
        return
    if state.mode in ('edit', 'detail'):
        exp = _load_selected(backend, state)
        if exp is not None:
            if state.mode == 'edit':
                _render_form(backend, user_id, state, exp)
            else:
                experiment_detail.render(backend, user_id, state, exp)
            return
    _render_list(backend, user_id, state)
