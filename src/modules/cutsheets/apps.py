from django.apps import AppConfig


class CutsheetsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.cutsheets"
    label = "cutsheets"
