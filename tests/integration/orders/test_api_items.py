"""Integration tests for station status updates.

PATCH /api/v1/orders/{pk}/items/{item_id}/
"""

from __future__ import annotations

import pytest

from modules.orders.models import LineItem

pytestmark = pytest.mark.integration


def _item_url(order, item_id) -> str:
    return f"/api/v1/orders/{order.id}/items/{item_id}/"


@pytest.fixture()
def order(make_order):
    return make_order(items=[{"external_id": "li-1"}, {"external_id": "li-2"}])


class TestStationUpdates:
    def test_frame_cutter_completes_frame(self, client_for, frame_cutter, order):
        response = client_for(frame_cutter).patch(
            _item_url(order, "li-1"), {"frame_cutting_status": "Complete"}, format="json"
        )

        assert response.status_code == 200
        data = response.json()
        assert data["item"]["frame_cutting_status"] == "Complete"
        assert data["order"]["status"] == "In Progress"
        assert data["changed_fields"] == ["frame_cutting_status"]

    def test_quality_blocked_until_cut(self, client_for, quality_inspector, order):
        response = client_for(quality_inspector).patch(
            _item_url(order, "li-1"), {"quality_status": "Ready to Package"}, format="json"
        )

        assert response.status_code == 400
        assert response.json() == {
            "detail": "Quality requires frame and mesh cutting to be complete first.",
            "code": "cutting_not_complete",
        }
        assert LineItem.objects.get(external_id="li-1").quality_status == "Pending"

    def test_packed_item_frozen(self, client_for, frame_cutter, make_order):
        order = make_order(
            items=[
                {
                    "external_id": "li-1",
                    "frame_cutting_status": "Complete",
                    "mesh_cutting_status": "Complete",
                    "quality_status": "Packed",
                }
            ]
        )
        response = client_for(frame_cutter).patch(
            _item_url(order, "li-1"), {"frame_cutting_status": "Pending"}, format="json"
        )
        assert response.status_code == 400
        assert response.json()["code"] == "frozen_after_packed"

    def test_admin_bypasses_guard(self, admin_api, order):
        response = admin_api.patch(
            _item_url(order, "li-2"), {"quality_status": "Packed"}, format="json"
        )
        assert response.status_code == 200
        assert response.json()["order"]["status"] == "In Progress"

    def test_role_in_body_is_ignored(self, client_for, quality_inspector, order):
        response = client_for(quality_inspector).patch(
            _item_url(order, "li-1"),
            {"quality_status": "Packed", "role": "Admin"},
            format="json",
        )
        assert response.status_code == 400

    def test_full_flow_completes_order(self, client_for, frame_cutter, mesh_cutter, quality_inspector, order):
        for item_id in ("li-1", "li-2"):
            client_for(frame_cutter).patch(
                _item_url(order, item_id), {"frame_cutting_status": "Complete"}, format="json"
            )
            client_for(mesh_cutter).patch(
                _item_url(order, item_id), {"mesh_cutting_status": "Complete"}, format="json"
            )
            response = client_for(quality_inspector).patch(
                _item_url(order, item_id), {"quality_status": "Packed"}, format="json"
            )

        assert response.json()["order"]["status"] == "Completed"
        order.refresh_from_db()
        assert order.status == "Completed"


class TestValidation:
    def test_empty_body(self, admin_api, order):
        response = admin_api.patch(_item_url(order, "li-1"), {}, format="json")
        assert response.status_code == 400

    def test_unknown_status_value(self, admin_api, order):
        response = admin_api.patch(
            _item_url(order, "li-1"), {"quality_status": "Shipped"}, format="json"
        )
        assert response.status_code == 400

    def test_unknown_item(self, admin_api, order):
        response = admin_api.patch(
            _item_url(order, "nope"), {"quality_status": "Pending"}, format="json"
        )
        assert response.status_code == 404

    def test_unknown_order(self, admin_api):
        response = admin_api.patch(
            "/api/v1/orders/missing/items/li-1/", {"quality_status": "Pending"}, format="json"
        )
        assert response.status_code == 404
