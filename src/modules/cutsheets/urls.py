"""Cut-sheet URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.cutsheets.views import OrderCutSheetsView

urlpatterns = [
    path(
        "orders/<str:pk>/cut-sheets/",
        OrderCutSheetsView.as_view(),
        name="order-cut-sheets",
    ),
]
