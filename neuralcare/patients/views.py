from django.contrib.messages.views import SuccessMessageMixin
from django.urls import reverse
from django.utils.translation import gettext_lazy as _
from django.views.generic import DetailView
from django.views.generic import ListView
from django.views.generic import UpdateView

from neuralcare.users.access import RoleRequiredMixin
from neuralcare.users.models import Role

from .forms import PatientForm
from .helpers import ALL_RISKS
from .helpers import filter_patients
from .models import Patient
from .models import RiskLevel

STAFF_ROLES = frozenset({Role.CLINICIAN, Role.ADMIN})


class PatientListView(RoleRequiredMixin, ListView):
    """Patient list with a name search (``q``) and a risk filter (``risk``)."""

    allowed_roles = STAFF_ROLES
    template_name = "patients/patient_list.html"
    context_object_name = "patients"
    paginate_by = 20

    def get_queryset(self):
        queryset = Patient.objects.select_related("user").order_by("-created_at")
        return filter_patients(
            queryset,
            query=self.request.GET.get("q", ""),
            risk=self.request.GET.get("risk", ALL_RISKS),
        )

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["search_query"] = self.request.GET.get("q", "")
        context["risk_filter"] = self.request.GET.get("risk", ALL_RISKS)
        context["risk_choices"] = RiskLevel.choices
        return context


patient_list_view = PatientListView.as_view()


class PatientDetailView(RoleRequiredMixin, DetailView):
    allowed_roles = STAFF_ROLES
    model = Patient
    template_name = "patients/patient_detail.html"
    context_object_name = "patient"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        patient = self.object
        context["test_results"] = patient.test_results.order_by("-date", "-created_at")[:10]
        context["insights"] = patient.insights.all()[:5]
        context["exercises"] = patient.assigned_exercises.order_by("-assigned_date")[:10]
        return context


patient_detail_view = PatientDetailView.as_view()


class PatientUpdateView(RoleRequiredMixin, SuccessMessageMixin, UpdateView):
    allowed_roles = STAFF_ROLES
    model = Patient
    form_class = PatientForm
    template_name = "patients/patient_form.html"
    success_message = _("Patient record updated")

    def get_success_url(self) -> str:
        return reverse("patients:detail", kwargs={"pk": self.object.pk})


patient_update_view = PatientUpdateView.as_view()
