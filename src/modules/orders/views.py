"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into appropriate
HTTP status codes; the view never swallows generic exceptions.
"""

from __future__ import annotations

import json

from django.http import StreamingHttpResponse
from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import renderers, status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.permissions import BasePermission
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.accounts.exceptions import InvalidRole
from modules.accounts.permissions import HasStaffRole, IsAdminRole
from modules.core.authentication import QueryParamJWTAuthentication
from modules.orders.broadcast import broadcaster, sse_stream
from modules.orders.dtos import (
    BoxDTO,
    CreateOrderDTO,
    ItemStatusChangeDTO,
    LineItemInputDTO,
    UpdateBoxDTO,
    UpdateOrderDTO,
)
from modules.orders.exceptions import (
    BoxNotFound,
    DuplicateOrder,
    LineItemNotFound,
    OrderNotFound,
    TransitionRejected,
    UnknownLineItems,
)
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    BoxInputSerializer,
    BoxSerializer,
    CreateOrderSerializer,
    ItemStatusChangeSerializer,
    LineItemSerializer,
    OrderListSerializer,
    OrderSerializer,
    UpdateOrderSerializer,
)
from modules.orders.services import OrderService

ADMIN_ACTIONS = {"create", "partial_update", "destroy"}


class EventStreamRenderer(renderers.BaseRenderer):
    """Lets ``Accept: text/event-stream`` pass content negotiation.

    The stream itself is a ``StreamingHttpResponse``; this renderer only
    renders the JSON error bodies returned before streaming starts.
    """

    media_type = "text/event-stream"
    format = "event-stream"
    charset = "utf-8"

    def render(self, data, accepted_media_type=None, renderer_context=None):
        if data is None:
            return b""
        return json.dumps(data).encode(self.charset)


def _not_found(message: str = "Order not found.") -> Response:
    return Response({"detail": message}, status=status.HTTP_404_NOT_FOUND)


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with an injected repository (DIP).
    Does **not** extend ``ModelViewSet``; all ORM access goes through
    the service/repository layer.
    """

    queryset = Order.objects.all()
    filterset_class = OrderFilter
    search_fields = ["name", "email", "customer_first_name", "customer_last_name"]
    ordering_fields = ["created_at", "processed_at", "status", "name"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(order_repository=OrderDjangoRepository())

    def get_permissions(self) -> list[BasePermission]:
        if self.action in ADMIN_ACTIONS:
            return [IsAdminRole()]
        return [HasStaffRole()]

    def get_throttles(self) -> list[BaseThrottle]:
        """Throttle scopes per action."""
        throttle_scope: str | None
        if self.action in {"list", "retrieve"}:
            throttle_scope = "order_listing"
        elif self.action == "update_item":
            throttle_scope = "item_status"
        else:
            throttle_scope = None
        self.throttle_scope = throttle_scope
        return super().get_throttles()

    def get_queryset(self):
        return self._service.list_orders()

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/

        Filtering (status, store, source, date range) is handled by
        ``OrderFilter``; ``?search=`` matches name, email and customer.
        Results are paginated.
        """
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        serializer = OrderListSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/  (``pk`` may also be the storefront id)"""
        try:
            order = self._service.get_order(pk)
        except OrderNotFound:
            return _not_found()
        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Admin console
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/  (manual order entry)"""
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            dto = CreateOrderDTO(
                store_key=data["store_key"],
                name=data.get("name"),
                email=data.get("email", ""),
                customer_first_name=data.get("customer_first_name", ""),
                customer_last_name=data.get("customer_last_name", ""),
                note=data.get("note", ""),
                items=[LineItemInputDTO(**item) for item in data["items"]],
            )
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            order = self._service.create_manual_order(dto)
        except DuplicateOrder as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/

        Direct write, ``status`` included.  The next line-item update
        re-derives the status again.
        """
        serializer = UpdateOrderSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        try:
            order = self._service.update_order(
                pk, UpdateOrderDTO(**serializer.validated_data)
            )
        except OrderNotFound:
            return _not_found()
        return Response(OrderSerializer(order).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/orders/{pk}/"""
        try:
            self._service.delete_order(pk)
        except OrderNotFound:
            return _not_found()
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Station status
    # ------------------------------------------------------------------

    @action(detail=True, methods=["patch"], url_path=r"items/(?P<item_id>[^/]+)")
    def update_item(
        self, request: Request, pk: str | None = None, item_id: str | None = None
    ) -> Response:
        """PATCH /api/v1/orders/{pk}/items/{item_id}/

        The caller's own role is checked by the transition guard.
        Rejections answer 400 with the reason and its stable ``code``.
        """
        serializer = ItemStatusChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        change = ItemStatusChangeDTO(**serializer.validated_data)

        try:
            outcome = self._service.update_item_status(
                pk, item_id, change, role=request.user.role
            )
        except OrderNotFound:
            return _not_found()
        except LineItemNotFound as exc:
            return _not_found(str(exc))
        except TransitionRejected as exc:
            return Response(
                {"detail": str(exc), "code": exc.code},
                status=status.HTTP_400_BAD_REQUEST,
            )
        except InvalidRole as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)

        return Response(
            {
                "item": LineItemSerializer(outcome.item).data,
                "order": OrderSerializer(outcome.order).data,
                "changed_fields": outcome.changed_fields,
            }
        )

    # ------------------------------------------------------------------
    # Boxes
    # ------------------------------------------------------------------

    @action(detail=True, methods=["get", "post"])
    def boxes(self, request: Request, pk: str | None = None) -> Response:
        """GET / POST /api/v1/orders/{pk}/boxes/"""
        if request.method == "GET":
            try:
                boxes = self._service.list_boxes(pk)
            except OrderNotFound:
                return _not_found()
            return Response(BoxSerializer(boxes, many=True).data)

        serializer = BoxInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            box = self._service.add_box(pk, BoxDTO(**serializer.validated_data))
        except OrderNotFound:
            return _not_found()
        except UnknownLineItems as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(BoxSerializer(box).data, status=status.HTTP_201_CREATED)

    @action(
        detail=True,
        methods=["patch", "delete"],
        url_path=r"boxes/(?P<box_id>[^/]+)",
    )
    def box_detail(
        self, request: Request, pk: str | None = None, box_id: str | None = None
    ) -> Response:
        """PATCH / DELETE /api/v1/orders/{pk}/boxes/{box_id}/"""
        try:
            if request.method == "DELETE":
                self._service.remove_box(pk, box_id)
                return Response(status=status.HTTP_204_NO_CONTENT)

            serializer = BoxInputSerializer(data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)
            box = self._service.update_box(
                pk, box_id, UpdateBoxDTO(**serializer.validated_data)
            )
        except OrderNotFound:
            return _not_found()
        except BoxNotFound as exc:
            return _not_found(str(exc))
        except UnknownLineItems as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(BoxSerializer(box).data)

    # ------------------------------------------------------------------
    # Live updates
    # ------------------------------------------------------------------

    @action(
        detail=True,
        methods=["get"],
        authentication_classes=[QueryParamJWTAuthentication],
        renderer_classes=[renderers.JSONRenderer, EventStreamRenderer],
    )
    def subscribe(self, request: Request, pk: str | None = None):
        """GET /api/v1/orders/{pk}/subscribe/  (Server-Sent Events)"""
        try:
            order = self._service.get_order(pk)
        except OrderNotFound:
            return _not_found()

        response = StreamingHttpResponse(
            sse_stream(broadcaster, str(order.id)),
            content_type="text/event-stream",
        )
        response["Cache-Control"] = "no-cache"
        response["X-Accel-Buffering"] = "no"
        return response
