"""Cut-sheet API.

``GET /api/v1/orders/{pk}/cut-sheets/?purpose=production|report&language=tr|en``

The measurement sections returned depend on the caller's role: frame
cutters get the frame saw sheet, mesh cutters the mesh sheet, quality and
admins both.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.accounts.permissions import HasStaffRole, role_of
from modules.cutsheets.calculator import Purpose, build_cut_sheet
from modules.cutsheets.stations import stations_for
from modules.orders.exceptions import OrderNotFound
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService

LANGUAGES = ("tr", "en")


class OrderCutSheetsView(APIView):
    permission_classes = [HasStaffRole]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(order_repository=OrderDjangoRepository())

    def get(self, request: Request, pk: str) -> Response:
        purpose = request.query_params.get("purpose", Purpose.PRODUCTION)
        if purpose not in Purpose.values:
            return Response(
                {"detail": f"purpose must be one of: {', '.join(Purpose.values)}."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        language = request.query_params.get("language", "tr")
        if language not in LANGUAGES:
            return Response(
                {"detail": f"language must be one of: {', '.join(LANGUAGES)}."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            order = self._service.get_order(pk)
        except OrderNotFound:
            return Response(
                {"detail": "Order not found."}, status=status.HTTP_404_NOT_FOUND
            )

        stations = stations_for(role_of(request.user))
        sheets = [
            build_cut_sheet(item, order.store_key, purpose, language, stations)
            for item in order.line_items.all()
        ]
        return Response(
            {
                "order_id": str(order.id),
                "name": order.name,
                "store_key": order.store_key,
                "purpose": purpose,
                "language": language,
                "stations": sorted(stations),
                "items": [sheet.model_dump() for sheet in sheets],
            }
        )
