"""Account API views: login, current user, admin user management."""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.viewsets import GenericViewSet
from rest_framework_simplejwt.views import TokenObtainPairView

from modules.accounts.dtos import CreateUserDTO, UpdateUserDTO
from modules.accounts.exceptions import (
    SelfModificationForbidden,
    UserAlreadyExists,
    UserNotFound,
)
from modules.accounts.models import User
from modules.accounts.permissions import IsAdminRole, role_of
from modules.accounts.repositories.django_repository import UserDjangoRepository
from modules.accounts.serializers import (
    CreateUserSerializer,
    StaffTokenObtainPairSerializer,
    UserSerializer,
)
from modules.accounts.services import UserService
from modules.cutsheets.stations import stations_for


class StaffTokenObtainPairView(TokenObtainPairView):
    """POST /api/v1/auth/token/: email + password to JWT pair."""

    permission_classes = [AllowAny]
    serializer_class = StaffTokenObtainPairSerializer


class MeView(APIView):
    """GET /api/v1/me: the caller and the stations they work."""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        role = role_of(request.user)
        data = UserSerializer(request.user).data
        data["stations"] = sorted(stations_for(role)) if role else []
        return Response(data)


class UserViewSet(GenericViewSet):
    """Admin-only user management."""

    queryset = User.objects.all()
    serializer_class = UserSerializer
    permission_classes = [IsAdminRole]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = UserService(repository=UserDjangoRepository())

    def list(self, request: Request) -> Response:
        """GET /api/v1/users/?status=active|inactive|all"""
        queryset = self._service.list_users(request.query_params.get("status", "all"))
        page = self.paginate_queryset(queryset)
        serializer = UserSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        try:
            user = self._service.get_user(pk)
        except UserNotFound:
            return Response(
                {"detail": "User not found."}, status=status.HTTP_404_NOT_FOUND
            )
        return Response(UserSerializer(user).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/users/"""
        serializer = CreateUserSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            dto = CreateUserDTO(**serializer.validated_data)
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            user = self._service.create_user(dto)
        except UserAlreadyExists as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/users/{pk}/"""
        data = request.data
        try:
            dto = UpdateUserDTO(
                name=data.get("name"),
                role=data.get("role"),
                is_active=data.get("is_active"),
                password=data.get("password"),
            )
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            user = self._service.update_user(pk, dto, actor_id=str(request.user.id))
        except UserNotFound:
            return Response(
                {"detail": "User not found."}, status=status.HTTP_404_NOT_FOUND
            )
        except SelfModificationForbidden as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(UserSerializer(user).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/users/{pk}/"""
        try:
            self._service.delete_user(pk, actor_id=str(request.user.id))
        except UserNotFound:
            return Response(
                {"detail": "User not found."}, status=status.HTTP_404_NOT_FOUND
            )
        except SelfModificationForbidden as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(status=status.HTTP_204_NO_CONTENT)
