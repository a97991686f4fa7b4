"""Session authentication: who is signed in, and who wants to know when that changes."""
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Optional

from loguru import logger

from domain.constants import ID_PREFIXES
from domain.models import User
from utils.ids import create_id_with_prefix
from .backend import BackendError, NotAuthenticated, Table


@dataclass
class AuthState:
    user: Optional[Dict[str, Any]]
    is_loading: bool = False


AuthListener = Callable[[AuthState], None]


class Auth:
    def __init__(self, users: Table):
        self._users = users
        self._user: Optional[Dict[str, Any]] = None
        self._listeners: List[AuthListener] = []

    @property
    def state(self) -> AuthState:
        return AuthState(user=dict(self._user) if self._user else None)

    def me(self) -> Dict[str, Any]:
        if self._user is None:
            raise NotAuthenticated("Not signed in")
        return dict(self._user)

    def login(self, name: str, email: Optional[str] = None) -> Dict[str, Any]:
        """Sign in as ``name``, creating the account on first use.

        An email, when given, identifies the account; otherwise the name does.
        """
        name = (name or '').strip()
        email = (email or '').strip() or None
        if not name:
            raise BackendError("A name is required to sign in")
        where = {'email': email} if email else {'name': name}
        found = self._users.list(where=where, order_by={'created_at': 'asc'}, limit=1)
        if found:
            user = found[0]
        else:
            user = self._users.create(asdict(User(
                id=create_id_with_prefix(ID_PREFIXES['users']), name=name, email=email)))
            logger.info("Created user {} ({})", user['id'], name)
        self._user = user
        logger.info("User {} signed in", user['id'])
        self._notify()
        return dict(user)

    def logout(self):
        if self._user is not None:
            logger.info("User {} signed out", self._user.get('id'))
        self._user = None
        self._notify()

    def on_auth_state_changed(self, callback: AuthListener) -> Callable[[], None]:
        """Call ``callback`` now and after every login/logout. Returns an unsubscribe function."""
        self._listeners.append(callback)
        callback(self.state)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)
        return unsubscribe

    def _notify(self):
        state = self.state
        for listener in list(self._listeners):
            listener(state)
