from django.contrib.auth import get_user_model
from django.db import models
from django.db.models import CASCADE
from django.db.models import SET_NULL
from django.db.models import CharField
from django.db.models import DateField
from django.db.models import DateTimeField
from django.db.models import DecimalField
from django.db.models import JSONField
from django.db.models import Model
from django.db.models import OneToOneField
from django.db.models import PositiveIntegerField
from django.db.models import PositiveSmallIntegerField
from django.db.models import TextChoices
from django.db.models import TextField
from django.utils import timezone

User = get_user_model()


class RiskLevel(TextChoices):
    LOW = "low", "Low"
    MEDIUM = "medium", "Medium"
    HIGH = "high", "High"


class Patient(Model):
    class Sex(TextChoices):
        MALE = "M", "Male"
        FEMALE = "F", "Female"

    # Patients created by a clinician may not have an account of their own.
    user = OneToOneField(
        User, null=True, blank=True, on_delete=CASCADE, related_name="patient_record"
    )
    clinician = models.ForeignKey(
        User, null=True, blank=True, on_delete=SET_NULL, related_name="patients"
    )
    birth_year = PositiveSmallIntegerField()
    sex = CharField(max_length=1, choices=Sex.choices)
    risk_level = CharField(max_length=10, choices=RiskLevel.choices, null=True, blank=True)
    conditions = JSONField(default=list, blank=True)
    created_at = DateTimeField(auto_now_add=True)
    updated_at = DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    @property
    def display_name(self) -> str:
        if self.user_id and self.user.name:
            return self.user.name
        return "Unknown"

    def __str__(self) -> str:
        return f"Patient {self.pk} \u2013 {self.display_name}"


class Measurement(Model):
    patient = models.ForeignKey(Patient, on_delete=CASCADE, related_name="measurements")
    date = DateField()
    cognitive_score = DecimalField(max_digits=5, decimal_places=2)
    reaction_ms = PositiveIntegerField()
    sleep_hours = DecimalField(max_digits=4, decimal_places=1)
    tremor_level = DecimalField(max_digits=4, decimal_places=2)
    created_at = DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=["patient", "date"], name="measurement_patient_date_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.patient} \u2013 {self.date:%Y-%m-%d}"


class Insight(Model):
    patient = models.ForeignKey(Patient, on_delete=CASCADE, related_name="insights")
    severity = CharField(max_length=10, choices=RiskLevel.choices)
    title = CharField(max_length=200)
    body = TextField()
    date = DateField(default=timezone.localdate)
    created_at = DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-date", "-created_at"]

    def __str__(self) -> str:
        return f"[{self.severity}] {self.title}"
