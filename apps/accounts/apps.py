from django.apps import AppConfig


class AccountsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.accounts'

    def ready(self):
        # Connect the forced-logout relay to the deactivation event
        from . import notifications  # noqa: F401
