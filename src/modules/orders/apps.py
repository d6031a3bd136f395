from django.apps import AppConfig


class OrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.orders"
    label = "orders"

    def ready(self) -> None:
        from modules.orders.events import ItemStatusUpdated, OrderCreated
        from modules.orders.handlers import (
            LIVE_EVENTS,
            item_status_updated_handler,
            live_update_handler,
            order_created_handler,
        )
        from shared.infrastructure.bus import event_bus

        event_bus.subscribe(OrderCreated, order_created_handler)
        event_bus.subscribe(ItemStatusUpdated, item_status_updated_handler)
        for event_class in LIVE_EVENTS:
            event_bus.subscribe(event_class, live_update_handler)
