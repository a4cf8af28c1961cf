import datetime

import pytest
from django.utils import timezone

from neuralcare.assessments.models import AssessmentResult
from neuralcare.assessments.registry import SEQUENCE_MEMORY
from neuralcare.assessments.tasks import derive_insight_task
from neuralcare.patients.models import Insight


def _result(patient, score, days_ago):
    return AssessmentResult.objects.create(
        patient=patient,
        test_type=SEQUENCE_MEMORY,
        score=score,
        date=timezone.now() - datetime.timedelta(days=days_ago),
    )


@pytest.mark.django_db
class TestInsightDerivation:
    def test_large_drop_creates_high_insight_on_commit(self, patient, django_capture_on_commit_callbacks):
        _result(patient, 90, days_ago=2)
        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            _result(patient, 55, days_ago=0)

        assert len(callbacks) == 1
        insight = Insight.objects.get(patient=patient)
        assert insight.severity == "high"
        assert "35 points" in insight.title

    def test_moderate_drop_creates_medium_insight(self, patient, django_capture_on_commit_callbacks):
        _result(patient, 80, days_ago=2)
        with django_capture_on_commit_callbacks(execute=True):
            _result(patient, 62, days_ago=0)

        assert Insight.objects.get(patient=patient).severity == "medium"

    def test_small_drop_creates_nothing(self, patient, django_capture_on_commit_callbacks):
        _result(patient, 80, days_ago=2)
        with django_capture_on_commit_callbacks(execute=True):
            _result(patient, 75, days_ago=0)

        assert not Insight.objects.filter(patient=patient).exists()

    def test_threshold_comes_from_settings(self, patient, settings):
        settings.INSIGHT_SCORE_DROP_THRESHOLD = 5
        _result(patient, 80, days_ago=2)
        latest = _result(patient, 74, days_ago=0)

        derive_insight_task(latest.pk)

        assert Insight.objects.get(patient=patient).severity == "medium"

    def test_first_result_creates_nothing(self, patient):
        result = _result(patient, 20, days_ago=0)
        derive_insight_task(result.pk)
        assert not Insight.objects.exists()

    def test_missing_result_is_ignored(self, db):
        derive_insight_task(999_999)
        assert not Insight.objects.exists()
