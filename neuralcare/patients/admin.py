from django.contrib import admin

from .models import Insight
from .models import Measurement
from .models import Patient


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ["id", "user", "clinician", "birth_year", "sex", "risk_level"]
    list_filter = ["risk_level", "sex"]
    search_fields = ["user__email", "user__name"]
    ordering = ["-created_at"]


@admin.register(Measurement)
class MeasurementAdmin(admin.ModelAdmin):
    list_display = ["patient", "date", "cognitive_score", "reaction_ms", "sleep_hours", "tremor_level"]
    search_fields = ["patient__user__email"]
    ordering = ["-date"]


@admin.register(Insight)
class InsightAdmin(admin.ModelAdmin):
    list_display = ["patient", "date", "severity", "title"]
    list_filter = ["severity"]
    search_fields = ["patient__user__email", "title"]
