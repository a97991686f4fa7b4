from typing import Any, MutableMapping, Optional

VIEW_MODES = ("list", "create", "edit", "detail")


class ManagerState:
    """The list/create/edit/detail switch of one page.

    State lives in ``store`` under ``key`` (the Streamlit session state in the
    app, a plain dict in tests), so it survives reruns of the page script.
    Deletes go through a two-step request/confirm handshake.
    """

    def __init__(self, store: MutableMapping[str, Any], key: str):
        self._store = store
        self._key = key
        if key not in store:
            store[key] = {"mode": "list", "selected_id": None, "pending_delete": None}

    @property
    def _state(self) -> dict:
        return self._store[self._key]

    @property
    def mode(self) -> str:
        return self._state["mode"]

    @property
    def selected_id(self) -> Optional[str]:
        return self._state["selected_id"]

    @property
    def pending_delete(self) -> Optional[str]:
        return self._state["pending_delete"]

    def _set(self, mode: str, selected_id: Optional[str] = None):
        if mode not in VIEW_MODES:
            raise ValueError(f"Unknown view mode: {mode}")
        self._state["mode"] = mode
        self._state["selected_id"] = selected_id

    def create(self):
        self._set("create")

    def edit(self, record_id: str):
        self._set("edit", record_id)

    def view(self, record_id: str):
        self._set("detail", record_id)

    def back_to_list(self):
        self._set("list")

    # save and cancel both land on the list
    saved = back_to_list
    cancel = back_to_list

    def request_delete(self, record_id: str):
        self._state["pending_delete"] = record_id

    def cancel_delete(self):
        self._state["pending_delete"] = None

    def confirm_delete(self) -> Optional[str]:
        record_id = self._state["pending_delete"]
        self._state["pending_delete"] = None
        return record_id
