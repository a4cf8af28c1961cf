"""
Huey background tasks for assessments.

Thin wrappers: load the row, delegate to a helper, persist the outcome.
"""
import logging

from django.conf import settings
from huey.contrib.djhuey import db_task

from neuralcare.assessments.helpers.insights import derive_score_insight
from neuralcare.assessments.models import AssessmentResult
from neuralcare.patients.models import Insight

logger = logging.getLogger(__name__)


@db_task()
def derive_insight_task(result_id: int) -> None:
    """Compare a new result with the patient's previous one of the same type."""
    try:
        result = AssessmentResult.objects.select_related("patient").get(pk=result_id)
    except AssessmentResult.DoesNotExist:
        logger.warning("derive_insight_task: AssessmentResult %s not found", result_id)
        return

    previous = (
        AssessmentResult.objects.filter(
            patient=result.patient,
            test_type=result.test_type,
            date__lte=result.date,
        )
        .exclude(pk=result.pk)
        .order_by("-date", "-created_at")
        .values_list("score", flat=True)
        .first()
    )
    derived = derive_score_insight(
        previous,
        result.score,
        settings.INSIGHT_SCORE_DROP_THRESHOLD,
        test_label=result.label,
    )
    if derived is None:
        return

    Insight.objects.create(
        patient=result.patient,
        severity=derived.severity,
        title=derived.title,
        body=derived.body,
        date=result.date.date(),
    )
    logger.info(
        "Insight (%s) created for patient %s after result %s",
        derived.severity,
        result.patient_id,
        result.pk,
    )
