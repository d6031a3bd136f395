"""Integration tests for the live-update stream.

GET /api/v1/orders/{pk}/subscribe/ streams Server-Sent Events; committed
order changes reach every open stream of that order.
"""

from __future__ import annotations

import json

import pytest
from django.core.signals import request_finished
from django.db import close_old_connections
from rest_framework_simplejwt.tokens import AccessToken

from modules.orders.broadcast import broadcaster

pytestmark = pytest.mark.integration


def _subscribe_url(order) -> str:
    return f"/api/v1/orders/{order.id}/subscribe/"


def _frames(response):
    return (chunk.decode() for chunk in response.streaming_content)


def _close(response):
    """Close the stream without recycling the test database connection."""
    request_finished.disconnect(close_old_connections)
    try:
        response.close()
    finally:
        request_finished.connect(close_old_connections)


class TestSubscribe:
    def test_stream_headers_and_greeting(self, client_for, quality_inspector, make_order):
        order = make_order()
        response = client_for(quality_inspector).get(_subscribe_url(order))

        assert response.status_code == 200
        assert response["Content-Type"].startswith("text/event-stream")
        assert response["Cache-Control"] == "no-cache"

        frames = _frames(response)
        assert next(frames) == f": connected to order {order.id}\n\n"
        assert broadcaster.subscriber_count(str(order.id)) == 1

        _close(response)
        assert broadcaster.subscriber_count(str(order.id)) == 0

    def test_event_stream_accept_header(self, client_for, quality_inspector, make_order):
        order = make_order()
        response = client_for(quality_inspector).get(
            _subscribe_url(order), HTTP_ACCEPT="text/event-stream"
        )
        assert response.status_code == 200
        _close(response)

    def test_token_query_parameter(self, api_client, frame_cutter, make_order):
        order = make_order()
        token = AccessToken.for_user(frame_cutter)

        response = api_client.get(_subscribe_url(order), {"token": str(token)})

        assert response.status_code == 200
        _close(response)

    def test_invalid_token_rejected(self, api_client, make_order):
        response = api_client.get(_subscribe_url(make_order()), {"token": "not-a-jwt"})
        assert response.status_code == 401

    def test_unauthenticated(self, api_client, make_order):
        assert api_client.get(_subscribe_url(make_order())).status_code == 401

    def test_unknown_order(self, admin_api):
        assert admin_api.get("/api/v1/orders/missing/subscribe/").status_code == 404


class TestCommittedChangesReachSubscribers:
    def test_item_update_is_streamed(
        self,
        client_for,
        frame_cutter,
        quality_inspector,
        make_order,
        django_capture_on_commit_callbacks,
    ):
        order = make_order(items=[{"external_id": "li-1"}])
        stream = client_for(quality_inspector).get(_subscribe_url(order))
        frames = _frames(stream)
        next(frames)

        with django_capture_on_commit_callbacks(execute=True):
            client_for(frame_cutter).patch(
                f"/api/v1/orders/{order.id}/items/li-1/",
                {"frame_cutting_status": "Complete"},
                format="json",
            )

        frame = next(frames)
        while frame == ": keepalive\n\n":
            frame = next(frames)
        _close(stream)

        assert frame.startswith("event: order_update\n")
        payload = json.loads(frame.split("data: ", 1)[1])
        assert payload["event_name"] == "ItemStatusUpdated"
        assert payload["aggregate_id"] == str(order.id)
        assert payload["item_id"] == "li-1"
        assert payload["order_status"] == "In Progress"
        assert payload["actor_role"] == "Frame Cutting"

    def test_rejected_change_is_not_streamed(
        self, client_for, quality_inspector, make_order, django_capture_on_commit_callbacks
    ):
        order = make_order(items=[{"external_id": "li-1"}])
        subscription = broadcaster.subscribe(str(order.id))
        try:
            with django_capture_on_commit_callbacks(execute=True) as callbacks:
                client_for(quality_inspector).patch(
                    f"/api/v1/orders/{order.id}/items/li-1/",
                    {"quality_status": "Packed"},
                    format="json",
                )
            assert callbacks == []
            assert subscription.get(timeout=0) is None
        finally:
            broadcaster.unsubscribe(subscription)
