from django.contrib import admin

from .models import AssignedExercise


@admin.register(AssignedExercise)
class AssignedExerciseAdmin(admin.ModelAdmin):
    list_display = ["title", "patient", "clinician", "exercise_type", "status", "assigned_date"]
    list_filter = ["status", "exercise_type"]
    search_fields = ["title", "patient__user__name"]
    ordering = ["-assigned_date"]
