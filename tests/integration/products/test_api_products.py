"""Integration tests for the product catalog endpoints.

Covers:
- List: ``q`` title search and ``store`` filter; staff can read.
- Retrieve and 404.
- Create, update and delete are admin only.
"""

from __future__ import annotations

import pytest
from freezegun import freeze_time

from modules.products.models import Product

pytestmark = pytest.mark.integration

URL = "/api/v1/products/"


@pytest.fixture()
def make_product():
    counter = {"n": 0}

    def _make(**fields):
        counter["n"] += 1
        fields.setdefault("store_key", "nl")
        fields.setdefault("external_id", str(9000 + counter["n"]))
        fields.setdefault("title", f"Product {counter['n']}")
        return Product.objects.create(**fields)

    return _make


class TestList:
    def test_staff_can_list(self, client_for, frame_cutter, make_product):
        make_product()
        response = client_for(frame_cutter).get(URL)

        assert response.status_code == 200
        assert response.json()["count"] == 1
        assert "raw" not in response.json()["results"][0]

    def test_anonymous_rejected(self, api_client):
        assert api_client.get(URL).status_code == 401

    def test_search_and_store_filters(self, admin_api, make_product):
        make_product(title="Plissé hordeur")
        make_product(title="Plissé raamhor", store_key="de")
        make_product(title="Rolhor")

        titles = [p["title"] for p in admin_api.get(URL, {"q": "plissé"}).json()["results"]]
        assert sorted(titles) == ["Plissé hordeur", "Plissé raamhor"]

        results = admin_api.get(URL, {"q": "plissé", "store": ".DE"}).json()["results"]
        assert [p["title"] for p in results] == ["Plissé raamhor"]

    def test_most_recently_updated_first(self, admin_api, make_product):
        with freeze_time("2024-03-01 09:00"):
            older = make_product(title="Older")
        with freeze_time("2024-03-02 09:00"):
            make_product(title="Newer")
        with freeze_time("2024-03-03 09:00"):
            older.vendor = "Flyscreen"
            older.save()

        results = admin_api.get(URL).json()["results"]
        assert [p["title"] for p in results] == ["Older", "Newer"]


class TestRetrieve:
    def test_by_id(self, admin_api, make_product):
        product = make_product(tags=["deur"])
        data = admin_api.get(f"{URL}{product.id}/").json()
        assert data["external_id"] == product.external_id
        assert data["tags"] == ["deur"]

    def test_missing(self, admin_api):
        assert admin_api.get(f"{URL}not-a-uuid/").status_code == 404


class TestAdminWrites:
    def test_create(self, admin_api):
        response = admin_api.post(
            URL,
            {"store_key": "UK", "title": "Pleated door", "tags": ["door"]},
            format="json",
        )

        assert response.status_code == 201
        assert response.json()["store_key"] == "uk"
        assert Product.objects.get().title == "Pleated door"

    def test_create_validation(self, admin_api):
        assert admin_api.post(URL, {"store_key": "nl"}, format="json").status_code == 400
        assert (
            admin_api.post(URL, {"store_key": "xx", "title": "A"}, format="json").status_code
            == 400
        )

    def test_create_duplicate_external_id(self, admin_api, make_product):
        product = make_product()
        response = admin_api.post(
            URL,
            {"store_key": "nl", "title": "Again", "external_id": product.external_id},
            format="json",
        )
        assert response.status_code == 409

    def test_staff_cannot_create(self, client_for, quality_inspector):
        response = client_for(quality_inspector).post(
            URL, {"store_key": "nl", "title": "A"}, format="json"
        )
        assert response.status_code == 403

    def test_patch(self, admin_api, make_product):
        product = make_product()
        response = admin_api.patch(f"{URL}{product.id}/", {"status": "draft"}, format="json")

        assert response.status_code == 200
        product.refresh_from_db()
        assert product.status == "draft"

    def test_delete(self, admin_api, make_product):
        product = make_product()
        assert admin_api.delete(f"{URL}{product.id}/").status_code == 204
        assert admin_api.delete(f"{URL}{product.id}/").status_code == 404
        assert not Product.objects.exists()
