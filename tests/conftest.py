"""Pytest configuration and fixtures"""
import os
import pytest
from fastapi.testclient import TestClient

# Set test environment variables before any settings are loaded
os.environ["ENV_MODE"] = "development"
os.environ.setdefault("SITE_URL", "http://localhost:3000")

from dashboard.core.config import get_settings
from dashboard.ordering import DraftRegistry, MenuCatalog, MenuItem, OrderCartManager
from dashboard.ordering.catalog import SAMPLE_MENU
from dashboard.services.identity import MockIdentityProvider
from dashboard.services.notifications import MockNotificationService
from dashboard.staff import SAMPLE_STAFF, StaffRoster


@pytest.fixture(autouse=True)
def fresh_settings():
    """Reload settings around each test so monkeypatched env vars apply."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def burger():
    return MenuItem(id="burger", name="Burger", description="Beef patty", category="main", price=10.0)


@pytest.fixture
def fries():
    return MenuItem(id="fries", name="Fries", description="Crispy potato", category="side", price=3.0)


@pytest.fixture
def cart():
    return OrderCartManager()


@pytest.fixture
def catalog():
    return MenuCatalog.from_records(SAMPLE_MENU)


@pytest.fixture
def roster():
    return StaffRoster.from_records(SAMPLE_STAFF)


@pytest.fixture
def registry():
    return DraftRegistry(estimated_ready_minutes=25)


@pytest.fixture
def notifications():
    """Deterministic mock email: never fails, no latency."""
    return MockNotificationService(failure_rate=0.0, min_latency=0.0, max_latency=0.0)


@pytest.fixture
def identity():
    return MockIdentityProvider()


@pytest.fixture
def client(catalog, roster, registry, notifications, identity):
    """Test client with fresh in-memory collaborators."""
    from dashboard.main import app
    from dashboard.ordering import get_draft_registry, get_menu_catalog
    from dashboard.services.identity import get_identity_provider
    from dashboard.services.notifications import get_notification_service
    from dashboard.staff import get_staff_roster

    app.dependency_overrides[get_menu_catalog] = lambda: catalog
    app.dependency_overrides[get_staff_roster] = lambda: roster
    app.dependency_overrides[get_draft_registry] = lambda: registry
    app.dependency_overrides[get_notification_service] = lambda: notifications
    app.dependency_overrides[get_identity_provider] = lambda: identity

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    """Sign up and sign in a waiter; return bearer headers."""
    credentials = {"email": "sarah@restaurant.com", "password": "secret123"}
    client.post("/api/auth/sign-up", json={**credentials, "full_name": "Sarah Elizabeth"})
    response = client.post("/api/auth/sign-in", json=credentials)
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
