"""Auth session held in local storage"""

import json
import logging
from typing import Iterable, Optional

from pydantic import ValidationError

from ..models.auth import Role, User
from ..models.common import Redirect
from .errors import StorageError
from .storage import KeyValueStorage

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


class AuthSession:
    """Current identity and bearer token, persisted like the browser does"""

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    @property
    def token(self) -> Optional[str]:
        try:
            return self.storage.get_item(TOKEN_KEY)
        except StorageError as e:
            logger.error(f"Error reading token: {e}")
            return None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def user(self) -> Optional[User]:
        try:
            raw = self.storage.get_item(USER_KEY)
            if not raw:
                return None
            return User.model_validate(json.loads(raw))
        except (StorageError, ValueError, ValidationError) as e:
            logger.error(f"Error parsing stored user: {e}")
            return None

    @property
    def role(self) -> Optional[Role]:
        user = self.user
        return user.role if user else None

    def save(self, user: User, token: Optional[str]) -> None:
        """Store user and token; storage failures are logged only"""
        try:
            if token:
                self.storage.set_item(TOKEN_KEY, token)
            self.storage.set_item(USER_KEY, json.dumps(user.to_wire()))
        except StorageError as e:
            logger.error(f"Error saving session: {e}")

    def clear(self) -> None:
        try:
            self.storage.remove_item(TOKEN_KEY)
            self.storage.remove_item(USER_KEY)
        except StorageError as e:
            logger.error(f"Error clearing session: {e}")


def require_role(
    user: Optional[User],
    allowed_roles: Iterable[Role] = (Role.ADMIN,),
) -> Optional[Redirect]:
    """
    Gate a role-restricted view.

    Returns a redirect to the login page when nobody is signed in, to the
    home page when the role is not allowed, and None when access is granted.
    """
    if user is None:
        return Redirect("/login")
    if user.role not in set(allowed_roles):
        return Redirect("/")
    return None
