from django.contrib import messages
from django.shortcuts import redirect
from django.views.generic import TemplateView

from neuralcare.users.access import RoleRequiredMixin
from neuralcare.users.models import Role


class HomePageView(TemplateView):
    """Landing page for visitors; signed-in users go straight to the dashboard."""

    template_name = "pages/home.html"

    def get(self, request, *args, **kwargs):
        if request.user.is_authenticated:
            return redirect("dashboard:home")
        return super().get(request, *args, **kwargs)


home_view = HomePageView.as_view()


class ReportsView(RoleRequiredMixin, TemplateView):
    allowed_roles = frozenset({Role.PATIENT})
    template_name = "pages/reports.html"

    def post(self, request, *args, **kwargs):
        # PDF export is not available yet.
        messages.info(request, "PDF report generation feature will be available soon.")
        return redirect("pages:reports")


reports_view = ReportsView.as_view()


class AdminSettingsView(RoleRequiredMixin, TemplateView):
    allowed_roles = frozenset({Role.ADMIN})
    template_name = "pages/admin_settings.html"


admin_settings_view = AdminSettingsView.as_view()
