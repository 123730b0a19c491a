import httpx
import pytest

from storefront.core.session import AuthSession, require_role
from storefront.models.auth import Role, User
from storefront.models.common import Redirect
from storefront.models.forms import (
    INVALID_EMAIL_MESSAGE,
    PASSWORD_MISMATCH_MESSAGE,
    REQUIRED_MESSAGE,
    RegistrationForm,
)
from storefront.mock_api.database.users import DEMO_PASSWORD
from storefront.services.api_client import StorefrontClient
from storefront.services.auth_service import AuthService

from .conftest import make_settings


def registration(**overrides) -> RegistrationForm:
    values = dict(
        first_name="Ana",
        last_name="Hoxha",
        email="ana@example.com",
        password="secret123",
        confirm_password="secret123",
    )
    values.update(overrides)
    return RegistrationForm(**values)


class TestAgainstApi:
    async def test_login_stores_session(self, shop):
        result = await shop.auth.login("demo@example.com", DEMO_PASSWORD)

        assert result.ok
        assert result.value.role == Role.USER
        assert shop.session.is_authenticated
        assert shop.session.user.email == "demo@example.com"

    async def test_wrong_password(self, shop):
        result = await shop.auth.login("demo@example.com", "nope")

        assert result.is_failed
        assert result.error == "Invalid email or password"
        assert not shop.session.is_authenticated

    async def test_current_user_uses_token(self, shop):
        assert (await shop.auth.current_user()).value is None

        await shop.auth.login("admin@example.com", DEMO_PASSWORD)
        result = await shop.auth.current_user()

        assert result.ok
        assert result.value.role == Role.ADMIN

    async def test_rejected_token_clears_session(self, shop):
        shop.session.save(
            User(id=2, role=Role.USER, first_name="Demo", last_name="User", email="demo@example.com"),
            "not-a-jwt",
        )

        result = await shop.auth.current_user()

        assert result.is_failed
        assert not shop.session.is_authenticated

    async def test_register_then_duplicate(self, shop):
        first = await shop.auth.register(registration())
        second = await shop.auth.register(registration())

        assert first.ok
        assert first.value.role == Role.USER
        assert second.is_failed
        assert second.error == "Email is already registered"

    async def test_register_validates_locally(self, shop):
        result = await shop.auth.register(registration(email="not-an-email", confirm_password="x"))

        assert result.is_failed
        assert result.field_errors == {
            "email": INVALID_EMAIL_MESSAGE,
            "confirm_password": PASSWORD_MISMATCH_MESSAGE,
        }
        assert not shop.session.is_authenticated

    async def test_logout(self, shop):
        await shop.auth.login("demo@example.com", DEMO_PASSWORD)
        shop.auth.logout()

        assert shop.session.user is None
        assert shop.session.token is None


class TestOffline:
    async def test_login_falls_back_to_demo_users(self, offline_shop):
        result = await offline_shop.auth.login("delivery@example.com", "anything")

        assert result.is_degraded
        assert result.value.role == Role.DELIVERY
        assert offline_shop.session.token.startswith("mock_token_")

    async def test_unknown_email_fails(self, offline_shop):
        result = await offline_shop.auth.login("stranger@example.com", "x")

        assert result.is_failed
        assert not offline_shop.session.is_authenticated

    async def test_current_user_from_storage(self, offline_shop):
        await offline_shop.auth.login("demo@example.com", "x")

        result = await offline_shop.auth.current_user()

        assert result.is_degraded
        assert result.value.email == "demo@example.com"


async def test_login_accepts_data_envelope(storage):
    def handler(request):
        return httpx.Response(200, json={"data": {
            "user": {"id": 9, "role": "user", "firstName": "E", "lastName": "N", "email": "e@n.io"},
            "token": "t0k",
        }})

    settings = make_settings()
    session = AuthSession(storage)
    client = StorefrontClient.from_settings(settings, transport=httpx.MockTransport(handler))
    try:
        result = await AuthService(client, session, settings).login("e@n.io", "pw")
    finally:
        await client.close()

    assert result.ok
    assert session.token == "t0k"


async def test_invalid_role_is_rejected(storage):
    def handler(request):
        return httpx.Response(200, json={
            "user": {"id": 9, "role": "superuser", "firstName": "E", "lastName": "N", "email": "e@n.io"},
            "token": "t0k",
        })

    settings = make_settings()
    session = AuthSession(storage)
    client = StorefrontClient.from_settings(settings, transport=httpx.MockTransport(handler))
    try:
        result = await AuthService(client, session, settings).login("e@n.io", "pw")
    finally:
        await client.close()

    assert result.is_failed
    assert session.token is None


class TestRoleGate:
    @pytest.fixture
    def courier(self):
        return User(id=3, role=Role.DELIVERY, first_name="D", last_name="U", email="d@example.com")

    def test_anonymous_goes_to_login(self):
        assert require_role(None, [Role.ADMIN]) == Redirect("/login")

    def test_wrong_role_goes_home(self, courier):
        assert require_role(courier, [Role.ADMIN]) == Redirect("/")

    def test_allowed_role(self, courier):
        assert require_role(courier, [Role.ADMIN, Role.DELIVERY]) is None


class TestRegistrationForm:
    def test_valid(self):
        assert registration().validate() == {}

    def test_required(self):
        errors = RegistrationForm().validate()

        assert errors["first_name"] == REQUIRED_MESSAGE
        assert errors["email"] == REQUIRED_MESSAGE

    def test_malformed_email(self):
        assert registration(email="ana@").validate() == {"email": INVALID_EMAIL_MESSAGE}

    def test_password_mismatch(self):
        errors = registration(confirm_password="other").validate()

        assert errors == {"confirm_password": PASSWORD_MISMATCH_MESSAGE}
