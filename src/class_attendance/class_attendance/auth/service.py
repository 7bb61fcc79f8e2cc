from __future__ import annotations

import hmac
import logging
from typing import MutableMapping

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

SESSION_FLAG = "authenticated"


class AuthService:
    """Use case: single admin login against configured credentials."""

    def __init__(self, *, username: str, password: str):
        self._username = username
        self._password_hash = generate_password_hash(password)

    def authenticate(self, username: str, password: str) -> None:
        user_ok = hmac.compare_digest((username or "").encode(), self._username.encode())
        try:
            password_ok = check_password_hash(self._password_hash, password or "")
        except ValueError:
            password_ok = False

        if not (user_ok and password_ok):
            logger.warning("Failed login for %r", username)
            raise AuthenticationError("Invalid username or password")


class SessionContext:
    """Boolean sign-in flag kept in a session store (the Flask session in the app).

    Passed to whatever needs it; reading the flag is the init step and
    ``sign_out`` is the teardown.
    """

    def __init__(self, store: MutableMapping):
        self._store = store

    @property
    def is_authenticated(self) -> bool:
        return bool(self._store.get(SESSION_FLAG, False))

    def sign_in(self, auth: AuthService, username: str, password: str) -> None:
        auth.authenticate(username, password)
        self._store[SESSION_FLAG] = True

    def sign_out(self) -> None:
        self._store.pop(SESSION_FLAG, None)
