import logging

import django.forms as forms
from allauth.account.forms import SignupForm
from django.contrib.auth import forms as admin_forms
from django.forms import EmailField
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .models import Role
from .models import User
from .models import UserRole

logger = logging.getLogger(__name__)

SIGNUP_ROLE_CHOICES = [
    (Role.PATIENT, _("Patient")),
    (Role.CLINICIAN, _("Clinician")),
]

SEX_CHOICES = [
    ("M", _("Male")),
    ("F", _("Female")),
]


class UserAdminChangeForm(admin_forms.UserChangeForm):
    class Meta(admin_forms.UserChangeForm.Meta):  # type: ignore[name-defined]
        model = User
        field_classes = {"email": EmailField}


class UserAdminCreationForm(admin_forms.AdminUserCreationForm):
    """
    Form for User Creation in the Admin Area.
    To change user signup, see UserSignupForm.
    """

    class Meta(admin_forms.UserCreationForm.Meta):  # type: ignore[name-defined]
        model = User
        fields = ("email",)
        field_classes = {"email": EmailField}
        error_messages = {
            "email": {"unique": _("This email has already been taken.")},
        }


class UserSignupForm(SignupForm):
    """
    Sign-up form with the account type and, for patients, the demographic
    fields needed to create their Patient record.

    Only patient and clinician accounts can be self-registered; admins are
    created with ``createsuperuser`` or in the admin.
    """

    name = forms.CharField(label=_("Full name"), min_length=2, max_length=255)
    role = forms.ChoiceField(
        label=_("Account type"),
        choices=SIGNUP_ROLE_CHOICES,
        initial=Role.PATIENT,
        widget=forms.RadioSelect,
    )
    birth_year = forms.IntegerField(label=_("Birth year"), required=False, min_value=1900)
    sex = forms.ChoiceField(
        label=_("Sex"),
        choices=[("", "---------")] + SEX_CHOICES,
        required=False,
    )

    def clean_birth_year(self):
        birth_year = self.cleaned_data.get("birth_year")
        if birth_year is not None and birth_year > timezone.localdate().year:
            raise forms.ValidationError(_("Birth year cannot be in the future."))
        return birth_year

    def clean(self):
        cleaned_data = super().clean()
        if cleaned_data.get("role") == Role.PATIENT:
            if not cleaned_data.get("birth_year") or not cleaned_data.get("sex"):
                self.add_error("birth_year", _("Birth year and sex are required for patients"))
        return cleaned_data

    def custom_signup(self, request, user):
        from neuralcare.patients.models import Patient

        user.name = self.cleaned_data["name"]
        user.save(update_fields=["name"])

        role = self.cleaned_data["role"]
        UserRole.objects.create(user=user, role=role)
        if role == Role.PATIENT:
            Patient.objects.create(
                user=user,
                birth_year=self.cleaned_data["birth_year"],
                sex=self.cleaned_data["sex"],
            )
        logger.info("Signed up user=%s role=%s", user.pk, role)
