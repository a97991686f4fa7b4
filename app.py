import datetime as dt
from urllib.parse import unquote

import streamlit as st
from loguru import logger

from config import settings
from services.backend import BackendError
from services.search import search_all
from ui import session
from ui.components import inject_base_css
from utils.logging import configure_logging

# Import the page rendering functions from the view modules
from views import dashboard, experiments, protocols, card_notes, analytics

# --- Page Registry ---
# Maps a page key to its label and the rendering function from the imported module.
PAGE_REGISTRY = {
    "dashboard": {
        "label": "🏠 Dashboard",
        "render_func": dashboard.view,
    },
    "experiments": {
        "label": "🧪 Experiments",
        "render_func": experiments.view,
    },
    "protocols": {
        "label": "📋 Protocols",
        "render_func": protocols.view,
    },
    "notes": {
        "label": "📝 Notes",
        "render_func": card_notes.view,
    },
    "analytics": {
        "label": "📊 Analytics",
        "render_func": analytics.view,
    },
}


def _track_auth(backend):
    """Mirror the backend's auth state into session state (once per session)."""
    if 'auth_unsubscribe' in st.session_state:
        return

    def on_change(state):
        st.session_state.current_user = state.user

    st.session_state.auth_unsubscribe = backend.auth.on_auth_state_changed(on_change)

    if settings.default_user and not st.session_state.current_user:
        try:
            backend.auth.login(settings.default_user)
        except BackendError:
            logger.exception("Automatic sign-in as {} failed", settings.default_user)


def _render_login(backend):
    st.title(f"🔬 {settings.app_name}")
    st.caption("Sign in to open your notebook. A new account is created on first sign-in.")
    with st.form("login_form"):
        name = st.text_input("Name *")
        email = st.text_input("Email (optional)")
        submitted = st.form_submit_button("Sign in", type="primary")
    if submitted:
        try:
            backend.auth.login(name, email)
        except BackendError as e:
            logger.warning("Sign-in failed: {}", e)
            st.error(str(e))
        else:
            st.rerun()


def _open_hit(hit):
    # card notes have no detail view; open the edit form
    session.navigate(hit.page, hit.record_id, mode='edit' if hit.page == 'notes' else 'detail')
    st.session_state.global_search = ''


def _render_search(backend, user_id: str):
    term = st.sidebar.text_input("🔍 Search", key="global_search",
                                 placeholder="Experiments, protocols, notes…")
    if not term.strip():
        return
    try:
        hits = search_all(backend, user_id, term)
    except BackendError:
        logger.exception("Search failed")
        st.sidebar.error("Search failed, please retry.")
        return
    if not hits:
        st.sidebar.caption("No results.")
    for hit in hits:
        st.sidebar.button(f"{hit.kind}: {hit.title}", key=f"search_{hit.page}_{hit.record_id}",
                          on_click=_open_hit, args=(hit,))


def main():
    """
    Main application router.

    Gates everything behind sign-in, then controls the sidebar navigation and
    renders the selected page.
    """
    st.set_page_config(page_title=settings.app_name, layout="wide")
    configure_logging(settings.log_level, settings.log_path)
    inject_base_css()

    backend = session.get_backend()
    _track_auth(backend)
    user = session.current_user()
    if not user:
        _render_login(backend)
        return

    # --- Sidebar ---
    st.sidebar.title(f"🔬 {settings.app_name}")
    top_l, top_r = st.sidebar.columns([3, 2])
    top_l.markdown(f"**{user['name']}**")
    if top_r.button("Sign out", key="logout"):
        backend.auth.logout()
        st.rerun()

    page_keys = list(PAGE_REGISTRY.keys())
    page_labels = [v["label"] for v in PAGE_REGISTRY.values()]

    # Query param persistence
    qs = st.query_params
    if 'nav_target' in st.session_state:
        target = PAGE_REGISTRY.get(st.session_state.nav_target)
        if target:
            st.session_state.navigation_radio = target['label']
            st.query_params['page'] = target['label']
        del st.session_state.nav_target
    elif 'page' in qs and 'navigation_radio' not in st.session_state:
        raw_param = qs.get('page')
        raw = unquote(raw_param) if isinstance(raw_param, str) else ''
        if raw in page_labels:
            st.session_state.navigation_radio = raw

    # Page selection radio buttons (single source of truth via widget state)
    selected_page_label = st.sidebar.radio(
        "Navigation",
        page_labels,
        key="navigation_radio"
    )
    st.query_params['page'] = selected_page_label
    selected_page_key = page_keys[page_labels.index(selected_page_label)]

    _render_search(backend, user['id'])

    # --- Page Rendering ---
    PAGE_REGISTRY[selected_page_key]["render_func"]()

    # --- Footer ---
    st.sidebar.markdown("---")
    st.sidebar.caption(
        f"Data dir: {settings.data_dir} | {dt.datetime.now(dt.timezone.utc).strftime('%H:%M:%S')}Z"
    )


if __name__ == "__main__":
    main()
