from django.apps import AppConfig


class StorefrontsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.storefronts"
    label = "storefronts"
