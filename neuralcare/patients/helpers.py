"""Lookups shared by every screen that works on a patient's records."""
from django.db.models import QuerySet

from neuralcare.patients.models import Patient
from neuralcare.patients.models import RiskLevel

ALL_RISKS = "all"


def get_patient_for_user(user) -> Patient | None:
    """Return the Patient record owned by *user*, or None if they have none."""
    if user is None or not user.is_authenticated:
        return None
    return Patient.objects.filter(user=user).first()


def filter_patients(queryset: QuerySet, query: str = "", risk: str = ALL_RISKS) -> QuerySet:
    """
    Narrow a Patient queryset by a case-insensitive name search and a risk level.

    An empty query matches everyone; ``risk`` is either ``"all"`` or one of
    the RiskLevel values. Unknown risk values match nothing.
    """
    query = (query or "").strip()
    if query:
        queryset = queryset.filter(user__name__icontains=query)
    if risk and risk != ALL_RISKS:
        if risk not in RiskLevel.values:
            return queryset.none()
        queryset = queryset.filter(risk_level=risk)
    return queryset


def parse_conditions(raw: str) -> list[str]:
    """Split a comma-separated conditions string into a clean, de-duplicated list."""
    seen = []
    for part in (raw or "").split(","):
        item = part.strip()
        if item and item not in seen:
            seen.append(item)
    return seen
