from django.apps import AppConfig


class GroupPurchasesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'backend.group_purchases'
