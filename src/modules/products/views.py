"""Product API views.

Exposes the ``ProductService`` via HTTP using DRF ViewSets.  Staff can
browse the catalog; only admins edit it.  Domain exceptions are
translated into HTTP status codes.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.filters import OrderingFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.permissions import BasePermission
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.accounts.permissions import HasStaffRole, IsAdminRole
from modules.products.dtos import ProductDTO, UpdateProductDTO
from modules.products.exceptions import ProductAlreadyExists, ProductNotFound
from modules.products.filters import ProductFilter
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import ProductSerializer
from modules.products.services import ProductService

ADMIN_ACTIONS = {"create", "update", "partial_update", "destroy"}

CREATE_FIELDS = (
    "store_key",
    "title",
    "external_id",
    "handle",
    "status",
    "product_type",
    "vendor",
    "tags",
    "images",
    "variants",
    "options",
)
UPDATE_FIELDS = ("title", "handle", "status", "product_type", "vendor", "tags")


def _not_found() -> Response:
    return Response({"detail": "Product not found."}, status=status.HTTP_404_NOT_FOUND)


def _bad_request(exc: Exception) -> Response:
    return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)


class ProductViewSet(ListModelMixin, GenericViewSet):
    """ViewSet for the storefront product catalog.

    ``?q=`` matches the title, ``?store=`` the storefront.
    """

    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    filterset_class = ProductFilter
    ordering_fields = ["updated_at", "title"]
    ordering = ["-updated_at", "-id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    def get_permissions(self) -> list[BasePermission]:
        if self.action in ADMIN_ACTIONS:
            return [IsAdminRole()]
        return [HasStaffRole()]

    def get_queryset(self):
        return self._service.list_products()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        try:
            product = self._service.get_product(pk)
        except ProductNotFound:
            return _not_found()
        return Response(ProductSerializer(product).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        data = {field: request.data[field] for field in CREATE_FIELDS if field in request.data}
        try:
            dto = ProductDTO(**data)
        except PydanticValidationError as exc:
            return _bad_request(exc)

        try:
            product = self._service.create_product(dto)
        except ProductAlreadyExists as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)

        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/products/{pk}/"""
        data = {field: request.data[field] for field in UPDATE_FIELDS if field in request.data}
        try:
            dto = UpdateProductDTO(**data)
        except PydanticValidationError as exc:
            return _bad_request(exc)

        try:
            product = self._service.update_product(pk, dto)
        except ProductNotFound:
            return _not_found()
        return Response(ProductSerializer(product).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/products/{pk}/"""
        try:
            self._service.delete_product(pk)
        except ProductNotFound:
            return _not_found()
        return Response(status=status.HTTP_204_NO_CONTENT)
