from django.apps import AppConfig


class AssessmentsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "neuralcare.assessments"

    def ready(self):
        import neuralcare.assessments.signals  # noqa: F401
