from django.contrib import admin

from .models import AssessmentResult


@admin.register(AssessmentResult)
class AssessmentResultAdmin(admin.ModelAdmin):
    list_display = ["id", "patient", "test_type", "score", "date"]
    list_filter = ["test_type"]
    search_fields = ["patient__user__email"]
    ordering = ["-date"]
