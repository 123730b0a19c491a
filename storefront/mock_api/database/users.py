"""Mock user accounts"""

import hashlib
from typing import Optional

from ...models.auth import Role, User

DEMO_PASSWORD = "password123"

SEED_USERS = [
    User(id=1, username="admin_user", email="admin@example.com", first_name="Admin",
         last_name="User", role=Role.ADMIN, phone="+1 234 567 8900"),
    User(id=2, username="demo_user", email="demo@example.com", first_name="Demo",
         last_name="User", role=Role.USER, phone="+1 234 567 8901"),
    User(id=3, username="delivery_user", email="delivery@example.com", first_name="Delivery",
         last_name="User", role=Role.DELIVERY, phone="+1 234 567 8902"),
]


def _hash(password: str) -> str:
    return hashlib.sha256(password.encode()).hexdigest()


class UserDatabase:
    """In-memory user storage keyed by email"""

    def __init__(self):
        self.users: dict[str, User] = {u.email: u.model_copy() for u in SEED_USERS}
        self.passwords: dict[str, str] = {u.email: _hash(DEMO_PASSWORD) for u in SEED_USERS}

    def authenticate(self, email: str, password: str) -> Optional[User]:
        user = self.users.get(email.lower())
        if user and self.passwords.get(user.email) == _hash(password):
            return user
        return None

    def get_by_id(self, user_id: str) -> Optional[User]:
        return next((u for u in self.users.values() if str(u.id) == str(user_id)), None)

    def create_user(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        phone: Optional[str] = None,
    ) -> Optional[User]:
        """Register a shopper; returns None when the email is taken"""
        email = email.lower()
        if email in self.users:
            return None
        user = User(
            id=max((int(u.id) for u in self.users.values()), default=0) + 1,
            email=email,
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            role=Role.USER,
        )
        self.users[email] = user
        self.passwords[email] = _hash(password)
        return user
