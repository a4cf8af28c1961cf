from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator
from django.db import models
from django.db.models import CASCADE
from django.db.models import CharField
from django.db.models import DateTimeField
from django.db.models import Model
from django.db.models import PositiveSmallIntegerField
from django.utils import timezone

from neuralcare.assessments.registry import TEST_REGISTRY
from neuralcare.patients.models import Patient


class AssessmentResult(Model):
    patient = models.ForeignKey(Patient, on_delete=CASCADE, related_name="test_results")
    test_type = CharField(max_length=50)
    score = PositiveSmallIntegerField(validators=[MaxValueValidator(100)])
    date = DateTimeField(default=timezone.now)
    created_at = DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-date", "-created_at"]
        indexes = [
            models.Index(fields=["patient", "date"], name="result_patient_date_idx"),
        ]

    def clean(self):
        if self.test_type not in TEST_REGISTRY:
            raise ValidationError(
                {"test_type": f"'{self.test_type}' is not a registered test type."}
            )

    @property
    def label(self) -> str:
        return TEST_REGISTRY.get(self.test_type, {}).get("label", self.test_type)

    def __str__(self) -> str:
        return f"{self.test_type} {self.score}/100 \u2013 {self.patient}"
