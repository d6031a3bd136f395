"""Integration tests for the Celery configuration."""

import pytest

pytestmark = pytest.mark.integration


class TestCeleryConfig:
    """Verifies Celery loads through Django settings."""

    def test_celery_app_is_importable(self):
        from config.celery import app

        assert app.main == "flyscreen"

    def test_celery_app_exported_from_init(self):
        from config import celery_app

        assert celery_app.main == "flyscreen"

    def test_celery_serializer_is_json(self, settings):
        assert settings.CELERY_TASK_SERIALIZER == "json"
        assert settings.CELERY_RESULT_SERIALIZER == "json"
        assert settings.CELERY_ACCEPT_CONTENT == ["json"]

    def test_celery_timezone_matches_django(self, settings):
        assert settings.CELERY_TIMEZONE == settings.TIME_ZONE

    def test_beat_polls_every_store(self, settings):
        schedule = settings.CELERY_BEAT_SCHEDULE
        assert {entry["args"] for entry in schedule.values()} == {
            ("nl",),
            ("de",),
            ("uk",),
            ("fr",),
            ("dk",),
        }
        assert all(entry["task"] == "storefronts.sync_orders" for entry in schedule.values())
