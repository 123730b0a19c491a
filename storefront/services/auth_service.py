"""
Auth client

Login, registration and current-user lookup. The resulting user and token
are kept in the `AuthSession`; the API client reads the token from there.
"""

import time
from typing import Any, Optional

from ..core.session import AuthSession
from ..core.config import Settings
from ..models.auth import AuthResponse, Role, User
from ..models.common import Result
from ..models.forms import RegistrationForm
from . import mock_data
from .api_client import StorefrontClient
from .base import ApiService

LOGIN_ERRORS = {
    401: "Invalid email or password",
    403: "Your account has been deactivated",
    404: "User not found",
    500: "Server error occurred",
}


def _unwrap(data: Any) -> Any:
    """Accept both `{...}` and `{"data": {...}}` response envelopes"""
    if isinstance(data, dict) and isinstance(data.get("data"), dict):
        return data["data"]
    return data


def _parse_user(data: Any) -> User:
    data = _unwrap(data)
    if isinstance(data, dict) and isinstance(data.get("user"), dict):
        data = data["user"]
    return User.model_validate(data)


class AuthService(ApiService):
    """Authentication against the API with demo users when it is unreachable"""

    name = "AuthService"

    def __init__(self, client: StorefrontClient, session: AuthSession, settings: Settings):
        super().__init__(client, settings)
        self.session = session

    def _store(self, result: Result[Optional[AuthResponse]]) -> Result[User]:
        if result.is_failed:
            return Result.failed(result.error or "Login failed")
        if result.value is None:
            return Result.failed("Invalid email or password")
        self.session.save(result.value.user, result.value.token)
        return Result(result.outcome, result.value.user, result.error)

    async def login(self, email: str, password: str) -> Result[User]:
        def mock() -> Optional[AuthResponse]:
            user = next((u for u in mock_data.MOCK_USERS.values() if u.email == email), None)
            if user is None:
                return None
            return AuthResponse(
                user=user,
                token=f"mock_token_{int(time.time() * 1000)}",
                message="Mock data (API unavailable)",
                is_mock=True,
            )

        result = await self._call(
            f"Logging in {email}",
            lambda: self.client.login(email, password),
            lambda data: AuthResponse.model_validate(_unwrap(data)),
            mock,
            status_messages=LOGIN_ERRORS,
        )
        return self._store(result)

    async def register(self, form: RegistrationForm) -> Result[User]:
        errors = form.validate()
        if errors:
            return Result.failed("Please correct the highlighted fields", field_errors=errors)

        def mock() -> AuthResponse:
            template = mock_data.MOCK_USERS[Role.USER]
            user = template.model_copy(update={
                "id": int(time.time() * 1000),
                "first_name": form.first_name.strip(),
                "last_name": form.last_name.strip(),
                "email": form.email.strip(),
                "phone": form.phone.strip() or template.phone,
                "role": Role.USER,
            })
            return AuthResponse(
                user=user,
                token=f"mock_token_{int(time.time() * 1000)}",
                message="Mock data (API unavailable)",
                is_mock=True,
            )

        result = await self._call(
            f"Registering {form.email}",
            lambda: self.client.register(form.to_payload()),
            lambda data: AuthResponse.model_validate(_unwrap(data)),
            mock,
            status_messages={409: "Email is already registered"},
        )
        return self._store(result)

    async def current_user(self) -> Result[Optional[User]]:
        """
        Resolve the signed-in user.

        No token means nobody is signed in. A rejected token clears the
        session; an unreachable API falls back to the stored user.
        """
        if not self.session.is_authenticated:
            return Result.success(None)

        result = await self._call(
            "Fetching current user",
            self.client.me,
            _parse_user,
            lambda: self.session.user,
        )
        if result.is_failed:
            self.session.clear()
            return Result.failed("Failed to get user data")
        if result.ok and result.value is not None:
            self.session.save(result.value, None)
        return result

    def logout(self) -> None:
        self.session.clear()
