from django.contrib.auth.views import redirect_to_login
from django.shortcuts import redirect
from django.shortcuts import render

from neuralcare.users.session import GuardDecision
from neuralcare.users.session import evaluate_route_guard


class RoleRequiredMixin:
    """
    Gate a class-based view on the resolved session context.

    ``allowed_roles`` of None admits any signed-in user.
    """

    allowed_roles: frozenset[str] | None = None
    loading_template_name = "users/loading.html"

    def get_allowed_roles(self):
        return self.allowed_roles

    def dispatch(self, request, *args, **kwargs):
        context = getattr(request, "session_context", None)
        decision = evaluate_route_guard(context, self.get_allowed_roles())
        if decision is GuardDecision.PENDING:
            return render(request, self.loading_template_name)
        if decision is GuardDecision.SIGN_IN:
            return redirect_to_login(request.get_full_path())
        if decision is GuardDecision.DASHBOARD:
            return redirect("dashboard:home")
        return super().dispatch(request, *args, **kwargs)
