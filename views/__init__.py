"""View modules for manual routing.

The app uses a custom router in `app.py` instead of Streamlit's automatic
multi-page system. Every page lives under `views/` and exposes a `view()`
function; pages with records (experiments, protocols, notes) switch between
list, form and detail rendering through `ui.view_state.ManagerState`.

Add any new page as a module with a `view()` callable and register it in
`PAGE_REGISTRY` inside `app.py`.
"""
