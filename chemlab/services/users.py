from __future__ import annotations

import logging
import threading
from typing import Iterable

from chemlab.app.core.errors import InvalidInput, LastUserError, NotFound
from chemlab.app.models.core_types import Role
from chemlab.app.models.inventory import User, new_id

logger = logging.getLogger(__name__)


def make_initials(name: str) -> str:
    """'Mike Wang' -> 'MW', 'Admin' -> 'A', '' -> 'U'."""
    initials = "".join(part[0] for part in (name or "").split()[:2]).upper()
    return initials or "U"


class UserDirectory:
    """
    Users who can be credited on a transaction.

    Transactions copy the user's name, so renaming or deleting a user never
    rewrites history. The directory is never empty, and the current-user
    pointer always designates a member.
    """

    def __init__(self, users: Iterable[User]):
        self._users: list[User] = [u.model_copy() for u in users]
        if not self._users:
            raise InvalidInput("User directory needs at least one user")
        self._current_id = self._users[0].id
        self._lock = threading.Lock()

    def _index(self, user_id: str) -> int:
        for i, u in enumerate(self._users):
            if u.id == user_id:
                return i
        raise NotFound(f"User not found (id={user_id})")

    def list_users(self) -> list[User]:
        with self._lock:
            return [u.model_copy() for u in self._users]

    def get(self, user_id: str) -> User:
        with self._lock:
            return self._users[self._index(user_id)].model_copy()

    def add_user(self, name: str, role: Role = Role.staff) -> User:
        try:
            role = Role(role)
        except ValueError:
            raise InvalidInput(f"Unknown role {role!r} (expected Admin, Manager or Staff)") from None

        user = User(id=new_id(), name=name, role=role, initials=make_initials(name))
        with self._lock:
            self._users.append(user)
        logger.info("user added id=%s name=%s role=%s", user.id, user.name, user.role.value)
        return user.model_copy()

    def delete_user(self, user_id: str) -> None:
        with self._lock:
            idx = self._index(user_id)
            if len(self._users) <= 1:
                raise LastUserError()
            del self._users[idx]
            if self._current_id == user_id:
                self._current_id = self._users[0].id
        logger.info("user deleted id=%s", user_id)

    # ---------- Session ----------
    def current_user(self) -> User:
        with self._lock:
            return self._users[self._index(self._current_id)].model_copy()

    def set_current_user(self, user_id: str) -> User:
        with self._lock:
            user = self._users[self._index(user_id)]
            self._current_id = user.id
            return user.model_copy()
