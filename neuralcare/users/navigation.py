"""Role-specific sidebar menus."""
from dataclasses import dataclass

from django.utils.translation import gettext_lazy as _

from neuralcare.users.models import Role


@dataclass(frozen=True, slots=True)
class MenuItem:
    title: str
    url_name: str
    icon: str


PATIENT_MENU = (
    MenuItem(_("Dashboard"), "dashboard:home", "speedometer2"),
    MenuItem(_("Tests"), "assessments:history", "clipboard-data"),
    MenuItem(_("Exercises"), "exercises:list", "puzzle"),
    MenuItem(_("Reports"), "pages:reports", "file-earmark-text"),
)

CLINICIAN_MENU = (
    MenuItem(_("Dashboard"), "dashboard:home", "speedometer2"),
    MenuItem(_("Patients"), "patients:list", "people"),
    MenuItem(_("Exercises"), "exercises:list", "puzzle"),
    MenuItem(_("Tests"), "assessments:history", "clipboard-data"),
)

ADMIN_MENU = (
    MenuItem(_("Dashboard"), "dashboard:home", "speedometer2"),
    MenuItem(_("Patients"), "patients:list", "people"),
    MenuItem(_("Settings"), "pages:admin_settings", "gear"),
)


def menu_for_role(role: str | None) -> tuple[MenuItem, ...]:
    """Admin and clinician menus need an exact role match; anything else gets the patient menu."""
    if role == Role.ADMIN:
        return ADMIN_MENU
    if role == Role.CLINICIAN:
        return CLINICIAN_MENU
    return PATIENT_MENU
