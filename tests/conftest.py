import pytest

from rest_framework.test import APIClient

from modules.accounts.constants import Role
from modules.accounts.models import User
from modules.orders.constants import OrderSource
from modules.orders.models import LineItem, Order


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Staff users
# ---------------------------------------------------------------------------


def _make_user(email: str, role: Role, name: str) -> User:
    return User.objects.create_user(email, password="secret123", role=role, name=name)


@pytest.fixture()
def admin():
    return _make_user("admin@example.com", Role.ADMIN, "Admin")


@pytest.fixture()
def frame_cutter():
    return _make_user("frame@example.com", Role.FRAME_CUTTING, "Frame Cutter")


@pytest.fixture()
def mesh_cutter():
    return _make_user("mesh@example.com", Role.MESH_CUTTING, "Mesh Cutter")


@pytest.fixture()
def quality_inspector():
    return _make_user("quality@example.com", Role.QUALITY, "Quality Inspector")


@pytest.fixture()
def client_for():
    """Factory: APIClient force-authenticated as the given user."""

    def _client(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    return _client


@pytest.fixture()
def admin_api(client_for, admin):
    return client_for(admin)


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_order():
    """Factory: an order with one line item per entry in ``items``.

    Each entry is a dict of ``LineItem`` field overrides.
    """
    counter = {"n": 1000}

    def _make(items=None, store_key="nl", **fields):
        counter["n"] += 1
        fields.setdefault("name", f"#{counter['n']}")
        fields.setdefault("external_id", str(counter["n"]))
        fields.setdefault("source", OrderSource.SHOPIFY)
        order = Order.objects.create(store_key=store_key, **fields)
        for position, overrides in enumerate(items if items is not None else [{}]):
            values = {
                "external_id": f"{order.external_id}-{position + 1}",
                "width": 150.0,
                "height": 200.0,
                "profile_color": "White 9016",
                "orientation": "Horizontaal",
                "threshold_type": "Standaard",
            }
            values.update(overrides)
            LineItem.objects.create(order=order, position=position, **values)
        return order

    return _make
