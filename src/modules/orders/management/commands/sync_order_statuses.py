from __future__ import annotations

from django.core.management.base import BaseCommand

from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService


class Command(BaseCommand):
    help = "Re-derive every order's status from its line items."

    def handle(self, *args, **options):
        service = OrderService(order_repository=OrderDjangoRepository())
        updated, unchanged = service.recompute_statuses()
        self.stdout.write(
            self.style.SUCCESS(
                f"Status sync completed: updated={updated}, unchanged={unchanged}"
            )
        )
