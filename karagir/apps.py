"""
Karagir — Application Configuration
"""

from django.apps import AppConfig


class KaragirConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'karagir'
    verbose_name = 'Karagir Ledger'
