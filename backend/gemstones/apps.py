from django.apps import AppConfig


class GemstonesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'backend.gemstones'
