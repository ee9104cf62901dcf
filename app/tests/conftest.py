"""
Pytest configuration and fixtures for gateway API tests.
"""
import os

# Must be set before the application modules read their configuration
os.environ["APP_ENVIRONMENT"] = "Development"

import pytest
from fastapi.testclient import TestClient

from api.deps import get_user_repository
from core.config import Settings
from core.constants import Roles
from main import create_app
from services.auth_service import AuthService
from tests.fakes import FakeUserRepository, make_user


@pytest.fixture
def test_settings(tmp_path):
    """Development settings with a throwaway web root"""
    return Settings(
        environment="Development",
        web_root=str(tmp_path / "wwwroot"),
        https_redirection=False,
        jobs={"dashboard_allow_anonymous": True},
    )


@pytest.fixture
def admin_user():
    return make_user("admin", role=Roles.ADMIN)


@pytest.fixture
def regular_user():
    return make_user("alice")


@pytest.fixture
def user_repo(admin_user, regular_user):
    return FakeUserRepository([admin_user, regular_user])


@pytest.fixture
def app(test_settings, user_repo):
    application = create_app(test_settings)
    application.dependency_overrides[get_user_repository] = lambda: user_repo
    return application


@pytest.fixture
def client(app):
    """FastAPI test client fixture"""
    return TestClient(app)


@pytest.fixture
def auth_service(test_settings):
    return AuthService(test_settings.jwt)


@pytest.fixture
def admin_headers(auth_service, admin_user):
    token = auth_service.create_access_token(admin_user).access_token
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers(auth_service, regular_user):
    token = auth_service.create_access_token(regular_user).access_token
    return {"Authorization": f"Bearer {token}"}
