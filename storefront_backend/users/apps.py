# users/apps.py

"""
USERS APP CONFIG

Session provider for the storefront:
- Custom email-identity User
- Register / login / me / logout (JWT)
"""

from django.apps import AppConfig


class UsersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "users"
    verbose_name = "Users & Sessions"
