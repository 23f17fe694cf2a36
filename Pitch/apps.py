from django.apps import AppConfig


class PitchConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "Pitch"
