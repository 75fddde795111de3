from __future__ import annotations

import hmac
import logging
import secrets
from datetime import datetime
from typing import Optional

from posledger.domain.errors import AuthorizationError
from posledger.domain.models import ROLE_ADMIN, ROLE_STORE_USER, User

log = logging.getLogger(__name__)


PERMISSIONS: dict[str, set[str]] = {
    "add_product": {ROLE_ADMIN},
    "add_vendor": {ROLE_ADMIN},
    "add_store": {ROLE_ADMIN},
    "reset": {ROLE_ADMIN},
    "record_sale": {ROLE_ADMIN, ROLE_STORE_USER},
    "record_purchase": {ROLE_ADMIN, ROLE_STORE_USER},
    "record_cash_entry": {ROLE_ADMIN, ROLE_STORE_USER},
    "view_store": {ROLE_ADMIN, ROLE_STORE_USER},
    "view_all_stores": {ROLE_ADMIN},
}


def can(user: User, action: str, store_id: Optional[str] = None) -> bool:
    allowed_roles = PERMISSIONS.get(action)
    if not allowed_roles or user.role not in allowed_roles:
        return False
    # store users are confined to their own store; admins see every store
    if user.role == ROLE_STORE_USER and store_id is not None:
        return user.store_id == store_id
    return True


def require_action(user: User, action: str, store_id: Optional[str] = None) -> None:
    if not can(user, action, store_id):
        if store_id is not None and user.role in PERMISSIONS.get(action, set()):
            raise AuthorizationError(f"User '{user.username}' has no access to store '{store_id}'.")
        raise AuthorizationError(f"Role '{user.role}' is not allowed to perform '{action}'.")


class AuthService:
    def __init__(self, repo):
        self.repo = repo

    def login(self, username: str, password: str) -> Optional[User]:
        user = self.repo.get_user_by_username((username or "").strip())
        if not user or not hmac.compare_digest(user.password.encode("utf-8"), (password or "").encode("utf-8")):
            log.info("login_failed username=%s", username)
            return None

        self.repo.set_session(
            {
                "userId": user.id,
                "token": secrets.token_urlsafe(24),
                "startedAt": datetime.now().replace(microsecond=0).isoformat(sep=" "),
            }
        )
        log.info("login_ok user_id=%s role=%s", user.id, user.role)
        return user

    def logout(self) -> None:
        self.repo.set_session(None)

    def current_user(self) -> Optional[User]:
        session = self.repo.get_session()
        if not session:
            return None
        # resolved on every call, so a user dropped from the catalog loses its session
        return self.repo.get_user(session["userId"])

    def session_token(self) -> Optional[str]:
        session = self.repo.get_session()
        return session.get("token") if session else None

    def validate_token(self, token: str) -> User:
        expected = self.session_token()
        if not expected or not token or not hmac.compare_digest(expected.encode("utf-8"), token.encode("utf-8")):
            raise AuthorizationError("Invalid or expired session.")
        user = self.current_user()
        if user is None:
            raise AuthorizationError("Invalid or expired session.")
        return user

    def list_users(self) -> list[User]:
        return self.repo.list_users()

    def can(self, user: User, action: str, store_id: Optional[str] = None) -> bool:
        return can(user, action, store_id)

    def require_action(self, user: User, action: str, store_id: Optional[str] = None) -> None:
        require_action(user, action, store_id)
