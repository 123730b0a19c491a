"""Auth models"""

from enum import Enum
from typing import Optional

from .common import Identifier, WireModel


class Role(str, Enum):
    ADMIN = "admin"
    DELIVERY = "delivery"
    USER = "user"


class User(WireModel):
    """Authenticated identity"""
    id: Identifier
    role: Role
    first_name: str
    last_name: str
    email: str
    username: Optional[str] = None
    phone: Optional[str] = None

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class AuthResponse(WireModel):
    """Login/register response"""
    user: User
    token: Optional[str] = None
    message: Optional[str] = None
    is_mock: bool = False
