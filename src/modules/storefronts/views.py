"""Storefront endpoints: the Shopify order webhook and a manual sync."""

from __future__ import annotations

import json

import structlog
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.accounts.permissions import IsAdminRole
from modules.orders.exceptions import DuplicateOrder
from modules.storefronts.exceptions import (
    InvalidPayload,
    InvalidWebhookSignature,
    MissingWebhookHeaders,
    MissingWebhookSecret,
    ShopifyAPIError,
    StoreNotConfigured,
    UnknownShopDomain,
)
from modules.storefronts.services import build_sync_service
from modules.storefronts.webhooks import authenticate_webhook

logger = structlog.get_logger(__name__)


class ShopifyOrderWebhookView(APIView):
    """POST /api/v1/webhooks/shopify/orders/

    Authenticated by HMAC signature only.  The raw body is read before
    anything touches ``request.data`` so the signature covers the exact
    bytes Shopify sent.
    """

    authentication_classes: list = []
    permission_classes = [AllowAny]
    throttle_scope = "webhooks"

    def post(self, request: Request) -> Response:
        body = request.body
        try:
            store = authenticate_webhook(request.headers, body)
        except (MissingWebhookHeaders, UnknownShopDomain) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except MissingWebhookSecret as exc:
            return Response(
                {"detail": str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        except InvalidWebhookSignature as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_401_UNAUTHORIZED)

        try:
            payload = json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError):
            return Response({"detail": "Invalid JSON."}, status=status.HTTP_400_BAD_REQUEST)

        try:
            order, created = build_sync_service().ingest_payload(payload, store.key)
        except InvalidPayload as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except DuplicateOrder as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)

        logger.info(
            "webhook.order_ingested",
            store=store.key,
            order_id=str(order.id),
            created=created,
        )
        return Response(
            {
                "success": True,
                "order_id": str(order.id),
                "name": order.name,
                "created": created,
            },
            status=status.HTTP_200_OK,
        )


class StorefrontSyncView(APIView):
    """POST /api/v1/sync/?store=nl

    Runs the polling sync for one store in the request.
    """

    permission_classes = [IsAdminRole]

    def post(self, request: Request) -> Response:
        store = request.query_params.get("store") or request.data.get("store")
        if not store:
            return Response(
                {"detail": "Query parameter 'store' is required."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        try:
            result = build_sync_service().sync_store(store)
        except StoreNotConfigured as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except ShopifyAPIError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_502_BAD_GATEWAY)
        return Response(result.as_dict())
