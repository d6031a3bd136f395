"""Integration tests for order boxes."""

from __future__ import annotations

import pytest

from modules.orders.models import Box

pytestmark = pytest.mark.integration


@pytest.fixture()
def order(make_order):
    return make_order(items=[{"external_id": "li-1"}, {"external_id": "li-2"}])


def _boxes_url(order) -> str:
    return f"/api/v1/orders/{order.id}/boxes/"


BOX = {"length": 120, "width": 30, "height": 15, "weight": 6.5, "item_ids": ["li-1", "li-2"]}


class TestBoxes:
    def test_add_and_list(self, client_for, quality_inspector, order):
        client = client_for(quality_inspector)

        created = client.post(_boxes_url(order), BOX, format="json")
        listed = client.get(_boxes_url(order))

        assert created.status_code == 201
        assert created.json()["item_ids"] == ["li-1", "li-2"]
        assert [b["id"] for b in listed.json()] == [created.json()["id"]]

    def test_boxes_in_order_detail(self, admin_api, order):
        admin_api.post(_boxes_url(order), BOX, format="json")
        detail = admin_api.get(f"/api/v1/orders/{order.id}/").json()
        assert len(detail["boxes"]) == 1

    def test_update(self, admin_api, order):
        box_id = admin_api.post(_boxes_url(order), BOX, format="json").json()["id"]

        response = admin_api.patch(
            f"{_boxes_url(order)}{box_id}/", {"weight": 7.25, "item_ids": ["li-2"]}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["weight"] == 7.25
        assert response.json()["item_ids"] == ["li-2"]

    def test_delete(self, admin_api, order):
        box_id = admin_api.post(_boxes_url(order), BOX, format="json").json()["id"]
        assert admin_api.delete(f"{_boxes_url(order)}{box_id}/").status_code == 204
        assert not Box.objects.exists()

    @pytest.mark.parametrize(
        "payload",
        [
            {**BOX, "weight": 0},
            {**BOX, "length": -1},
            {k: v for k, v in BOX.items() if k != "height"},
        ],
    )
    def test_invalid_dimensions(self, admin_api, order, payload):
        assert admin_api.post(_boxes_url(order), payload, format="json").status_code == 400

    def test_unknown_items(self, admin_api, order):
        response = admin_api.post(_boxes_url(order), {**BOX, "item_ids": ["li-9"]}, format="json")
        assert response.status_code == 400
        assert "li-9" in response.json()["detail"]

    def test_unknown_box(self, admin_api, order):
        response = admin_api.delete(f"{_boxes_url(order)}00000000-0000-0000-0000-000000000000/")
        assert response.status_code == 404
