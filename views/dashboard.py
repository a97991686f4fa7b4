import html

import streamlit as st
from loguru import logger

from config import settings
from domain.constants import SOP_REMINDERS, STATUS_ICONS
from services import dashboard as dashboard_svc
from services.backend import BackendError
from ui import session
from ui.components import metric_row, status_badge
from utils.dates import format_short_date


QUICK_ACTIONS = [
    ("🧪 New experiment", 'experiments', 'create'),
    ("📋 Protocols", 'protocols', None),
    ("📝 Notes", 'notes', None),
    ("📊 Analytics", 'analytics', None),
]


def view():
    backend = session.get_backend()
    user = session.current_user() or {}
    st.header("Dashboard")
    st.caption(f"Welcome back, {user.get('name', 'researcher')}")

    try:
        overview = dashboard_svc.get_overview(backend, user.get('id'), recent_limit=settings.dashboard_recent_limit)
    except BackendError:
        logger.exception("Failed to load dashboard overview")
        st.error("Could not load your lab overview.")
        overview = {'total': 0, 'in_progress': 0, 'completed': 0, 'protocols': 0, 'recent': []}

    metric_row([
        ("Experiments", overview['total']),
        ("In progress", overview['in_progress']),
        ("Completed", overview['completed']),
        ("Protocols", overview['protocols']),
    ])

    left, right = st.columns([2, 1])
    with left:
        st.subheader("Recent experiments")
        if not overview['recent']:
            st.info("No experiments yet.")
        for exp in overview['recent']:
            with st.container(border=True):
                c1, c2 = st.columns([5, 1])
                c1.markdown(
                    f"{STATUS_ICONS.get(exp.status, '🧪')} **{html.escape(exp.title)}** {status_badge(exp.status)}",
                    unsafe_allow_html=True)
                c1.caption(f"Started {format_short_date(exp.start_date)}")
                if c2.button("Open", key=f"dash_open_{exp.id}"):
                    session.navigate('experiments', exp.id)
                    st.rerun()

    with right:
        st.subheader("Quick actions")
        for label, page, mode in QUICK_ACTIONS:
            if st.button(label, key=f"dash_quick_{page}", use_container_width=True):
                session.navigate(page, mode=mode)
                st.rerun()

        st.subheader("SOP reminders")
        for reminder in SOP_REMINDERS:
            st.markdown(f"- {reminder}")
