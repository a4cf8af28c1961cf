import pytest

from neuralcare.patients.helpers import filter_patients
from neuralcare.patients.helpers import get_patient_for_user
from neuralcare.patients.helpers import parse_conditions
from neuralcare.patients.models import Patient
from neuralcare.patients.tests.factories import PatientFactory
from neuralcare.users.tests.factories import UserFactory


class TestParseConditions:
    def test_splits_and_strips(self):
        assert parse_conditions(" hypertension, diabetes ,, ") == ["hypertension", "diabetes"]

    def test_removes_duplicates_keeping_order(self):
        assert parse_conditions("a, b, a") == ["a", "b"]

    def test_empty(self):
        assert parse_conditions("") == []
        assert parse_conditions(None) == []


@pytest.mark.django_db
class TestFilterPatients:
    def _patients(self):
        return {
            "anna": PatientFactory(user__name="Anna Bianchi", risk_level="high"),
            "marco": PatientFactory(user__name="Marco Verdi", risk_level="low"),
            "giovanna": PatientFactory(user__name="Giovanna Neri", risk_level="high"),
        }

    def test_no_filters_returns_everyone(self):
        self._patients()
        assert filter_patients(Patient.objects.all()).count() == 3

    def test_name_search_is_case_insensitive(self):
        patients = self._patients()
        result = filter_patients(Patient.objects.all(), query="ANNA")
        assert set(result) == {patients["anna"], patients["giovanna"]}

    def test_risk_filter(self):
        patients = self._patients()
        result = filter_patients(Patient.objects.all(), risk="low")
        assert list(result) == [patients["marco"]]

    def test_search_and_risk_combine(self):
        patients = self._patients()
        result = filter_patients(Patient.objects.all(), query="gio", risk="high")
        assert list(result) == [patients["giovanna"]]

    def test_unknown_risk_matches_nothing(self):
        self._patients()
        assert not filter_patients(Patient.objects.all(), risk="critical").exists()


@pytest.mark.django_db
class TestGetPatientForUser:
    def test_returns_linked_record(self, patient):
        assert get_patient_for_user(patient.user) == patient

    def test_user_without_record(self):
        assert get_patient_for_user(UserFactory()) is None

    def test_no_user(self):
        assert get_patient_for_user(None) is None
