"""Per-browser-session objects: the backend client, the signed-in user, page navigation."""
from typing import Any, Dict, Optional

import streamlit as st

from services.backend import Backend
from ui.view_state import ManagerState


def get_backend() -> Backend:
    if 'backend' not in st.session_state:
        st.session_state.backend = Backend()
    return st.session_state.backend


def current_user() -> Optional[Dict[str, Any]]:
    return st.session_state.get('current_user')


def current_user_id() -> Optional[str]:
    user = current_user()
    return user['id'] if user else None


def manager(key: str) -> ManagerState:
    return ManagerState(st.session_state, f"manager_{key}")


def navigate(page_key: str, record_id: Optional[str] = None, mode: str = 'detail'):
    """Jump to another page, optionally opening one of its records."""
    st.session_state.nav_target = page_key
    if record_id:
        state = manager(page_key)
        if mode == 'edit':
            state.edit(record_id)
        else:
            state.view(record_id)
    elif mode == 'create':
        manager(page_key).create()
