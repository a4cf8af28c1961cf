import logging

from django.contrib.auth import get_user_model
from django.contrib.auth import logout
from django.contrib.auth.mixins import LoginRequiredMixin
from django.contrib.messages.views import SuccessMessageMixin
from django.db.models import QuerySet
from django.shortcuts import redirect
from django.urls import reverse
from django.utils.translation import gettext_lazy as _
from django.views import View
from django.views.generic import DetailView
from django.views.generic import RedirectView
from django.views.generic import UpdateView

from neuralcare.users.session import SIGNED_OUT_CONTEXT

User = get_user_model()
logger = logging.getLogger(__name__)


class UserDetailView(LoginRequiredMixin, DetailView):
    model = User
    slug_field = "id"
    slug_url_kwarg = "id"

    def get_queryset(self):
        # Profiles are private: users only ever see their own.
        return User.objects.filter(pk=self.request.user.pk)


user_detail_view = UserDetailView.as_view()


class UserUpdateView(LoginRequiredMixin, SuccessMessageMixin, UpdateView):
    model = User
    fields = ["name"]
    success_message = _("Information successfully updated")

    def get_success_url(self) -> str:
        assert self.request.user.is_authenticated  # type guard
        return self.request.user.get_absolute_url()

    def get_object(self, queryset: QuerySet | None = None) -> User:
        assert self.request.user.is_authenticated  # type guard
        return self.request.user


user_update_view = UserUpdateView.as_view()


class UserRedirectView(LoginRequiredMixin, RedirectView):
    permanent = False

    def get_redirect_url(self) -> str:
        return reverse("users:detail", kwargs={"pk": self.request.user.pk})


user_redirect_view = UserRedirectView.as_view()


class SignOutView(View):
    """
    Invalidate the session, then go to the sign-in page.

    Navigation happens even when invalidating the session fails; the failure
    is logged rather than shown to the user.
    """

    def post(self, request):
        user_pk = request.user.pk
        try:
            logout(request)
        except Exception:
            logger.exception("Sign-out failed to invalidate session for user=%s", user_pk)
        request.session_context = SIGNED_OUT_CONTEXT
        return redirect(reverse("account_login"))


sign_out_view = SignOutView.as_view()
