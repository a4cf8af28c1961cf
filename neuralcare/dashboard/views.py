"""Dashboard views."""
from django.http import JsonResponse
from django.shortcuts import render
from django.views import View

from neuralcare.patients.helpers import get_patient_for_user
from neuralcare.patients.models import Patient
from neuralcare.patients.views import STAFF_ROLES
from neuralcare.users.access import RoleRequiredMixin
from neuralcare.users.models import Role

from .helpers import TIME_RANGES
from .helpers import compute_kpis
from .helpers import parse_time_range
from .helpers import range_start
from .helpers import risk_counts
from .helpers import severity_variant


class DashboardView(RoleRequiredMixin, View):
    """
    Patients get KPI averages over the selected range and their latest insights.
    Clinicians and admins get patient counts per risk level.
    """

    def get(self, request):
        days = parse_time_range(request.GET.get("range"))
        role = request.session_context.role
        context = {"time_range": days, "time_ranges": TIME_RANGES, "is_staff_view": role in STAFF_ROLES}

        if role in STAFF_ROLES:
            patients = Patient.objects.all()
            if role == Role.CLINICIAN:
                context["my_patient_count"] = patients.filter(clinician=request.user).count()
            context["risk_counts"] = risk_counts(patients.values_list("risk_level", flat=True))
            context["patient_count"] = patients.count()
        else:
            patient = get_patient_for_user(request.user)
            context["patient"] = patient
            if patient is not None:
                measurements = patient.measurements.filter(date__gte=range_start(days)).order_by("-date")
                context["kpis"] = compute_kpis(measurements)
                context["insights"] = [
                    {"insight": insight, "variant": severity_variant(insight.severity)}
                    for insight in patient.insights.order_by("-date", "-created_at")[:5]
                ]

        return render(request, "dashboard/dashboard.html", context)


dashboard_view = DashboardView.as_view()


class ChartDataView(RoleRequiredMixin, View):
    """
    JSON API: the patient's measurements over the selected range, oldest first.

    Returns:
        200 {"points": [{"date": "YYYY-MM-DD", "cognitive_score": <float>,
                         "reaction_ms": <int>, "sleep_hours": <float>,
                         "tremor_level": <float>}, ...]}
    """

    allowed_roles = frozenset({Role.PATIENT})

    def get(self, request):
        patient = get_patient_for_user(request.user)
        if patient is None:
            return JsonResponse({"points": []})
        days = parse_time_range(request.GET.get("range"))
        measurements = patient.measurements.filter(date__gte=range_start(days)).order_by("date")
        points = [
            {
                "date": m.date.isoformat(),
                "cognitive_score": float(m.cognitive_score),
                "reaction_ms": m.reaction_ms,
                "sleep_hours": float(m.sleep_hours),
                "tremor_level": float(m.tremor_level),
            }
            for m in measurements
        ]
        return JsonResponse({"points": points})


chart_data_view = ChartDataView.as_view()
