import pytest
from django.urls import reverse

from neuralcare.assessments.models import AssessmentResult
from neuralcare.assessments.registry import SEQUENCE_MEMORY
from neuralcare.patients.tests.factories import InsightFactory
from neuralcare.patients.tests.factories import PatientFactory


@pytest.mark.django_db
class TestPatientListView:
    def test_patient_role_is_sent_to_dashboard(self, client, patient):
        client.force_login(patient.user)
        response = client.get(reverse("patients:list"))
        assert response.status_code == 302
        assert response.url == reverse("dashboard:home")

    def test_clinician_sees_newest_first(self, client, clinician):
        older = PatientFactory()
        newer = PatientFactory()
        client.force_login(clinician)

        response = client.get(reverse("patients:list"))

        assert response.status_code == 200
        assert list(response.context["patients"]) == [newer, older]

    def test_admin_filters_by_query_and_risk(self, client, admin_member):
        match = PatientFactory(user__name="Lucia Ferri", risk_level="medium")
        PatientFactory(user__name="Lucia Conti", risk_level="low")
        client.force_login(admin_member)

        response = client.get(reverse("patients:list"), {"q": "lucia", "risk": "medium"})

        assert list(response.context["patients"]) == [match]
        assert response.context["search_query"] == "lucia"
        assert response.context["risk_filter"] == "medium"


@pytest.mark.django_db
class TestPatientDetailView:
    def test_shows_related_records(self, client, clinician):
        patient = PatientFactory()
        AssessmentResult.objects.create(patient=patient, test_type=SEQUENCE_MEMORY, score=66)
        InsightFactory(patient=patient)
        client.force_login(clinician)

        response = client.get(reverse("patients:detail", kwargs={"pk": patient.pk}))

        assert response.status_code == 200
        assert len(response.context["test_results"]) == 1
        assert len(response.context["insights"]) == 1


@pytest.mark.django_db
class TestPatientUpdateView:
    def test_updates_risk_conditions_and_clinician(self, client, clinician):
        patient = PatientFactory()
        client.force_login(clinician)

        response = client.post(
            reverse("patients:update", kwargs={"pk": patient.pk}),
            {"risk_level": "high", "conditions": "hypertension, diabetes", "clinician": clinician.pk},
        )

        assert response.status_code == 302
        assert response.url == reverse("patients:detail", kwargs={"pk": patient.pk})
        patient.refresh_from_db()
        assert patient.risk_level == "high"
        assert patient.conditions == ["hypertension", "diabetes"]
        assert patient.clinician == clinician

    def test_blank_risk_clears_level(self, client, clinician):
        patient = PatientFactory(risk_level="low")
        client.force_login(clinician)

        client.post(reverse("patients:update", kwargs={"pk": patient.pk}), {"risk_level": "", "conditions": ""})

        patient.refresh_from_db()
        assert patient.risk_level is None
        assert patient.conditions == []
