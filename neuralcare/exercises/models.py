from django.conf import settings
from django.core.validators import MaxValueValidator
from django.db import models
from django.db.models import CASCADE
from django.db.models import CharField
from django.db.models import DateField
from django.db.models import DateTimeField
from django.db.models import Model
from django.db.models import PositiveSmallIntegerField
from django.db.models import TextField
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from neuralcare.patients.models import Patient


class InvalidStatusTransition(Exception):
    """Raised when an exercise is moved out of a terminal status."""


class AssignedExercise(Model):
    class ExerciseType(models.TextChoices):
        MEMORY = "memory", _("Memory")
        ATTENTION = "attention", _("Attention")
        REASONING = "reasoning", _("Reasoning")
        LANGUAGE = "language", _("Language")

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        COMPLETED = "completed", _("Completed")
        SKIPPED = "skipped", _("Skipped")

    clinician = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=CASCADE,
        related_name="exercises_assigned",
    )
    patient = models.ForeignKey(Patient, on_delete=CASCADE, related_name="assigned_exercises")
    title = CharField(max_length=200)
    description = TextField(blank=True)
    exercise_type = CharField(max_length=20, choices=ExerciseType.choices)
    instructions = TextField(blank=True)
    duration_minutes = PositiveSmallIntegerField(null=True, blank=True)
    status = CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    score = PositiveSmallIntegerField(null=True, blank=True, validators=[MaxValueValidator(100)])
    assigned_date = DateField(default=timezone.localdate)
    completed_date = DateField(null=True, blank=True)
    created_at = DateTimeField(auto_now_add=True)
    updated_at = DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-assigned_date", "-created_at"]

    def __str__(self) -> str:
        return f"{self.title} \u2013 {self.patient} ({self.status})"

    def _require_pending(self, target: str) -> None:
        if self.status != self.Status.PENDING:
            raise InvalidStatusTransition(f"Cannot move exercise {self.pk} from {self.status} to {target}")

    def _transition(self, target: str, **fields) -> None:
        """Move a pending row to ``target`` in one conditional UPDATE."""
        self._require_pending(target)
        fields.update(status=target, updated_at=timezone.now())
        updated = AssignedExercise.objects.filter(pk=self.pk, status=self.Status.PENDING).update(**fields)
        if not updated:
            self.refresh_from_db(fields=["status"])
            raise InvalidStatusTransition(f"Cannot move exercise {self.pk} from {self.status} to {target}")
        for name, value in fields.items():
            setattr(self, name, value)

    def mark_completed(self, score: int | None = None) -> None:
        if score is not None and not 0 <= score <= 100:
            raise ValueError("score must be between 0 and 100")
        self._transition(self.Status.COMPLETED, score=score, completed_date=timezone.localdate())

    def mark_skipped(self) -> None:
        self._transition(self.Status.SKIPPED)
