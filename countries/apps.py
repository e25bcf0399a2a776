import sys

from django.apps import AppConfig
from django.conf import settings
from loguru import logger


class CountriesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "countries"

    def ready(self):
        logger.remove()
        logger.add(sys.stderr, level=settings.LOG_LEVEL)
