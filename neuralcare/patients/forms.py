import django.forms as forms
from crispy_forms.helper import FormHelper
from crispy_forms.layout import Submit
from django.contrib.auth import get_user_model
from django.forms import ModelForm
from django.utils.translation import gettext_lazy as _

from neuralcare.users.models import Role

from .helpers import parse_conditions
from .models import Patient
from .models import RiskLevel

User = get_user_model()


class PatientForm(ModelForm):
    """Clinical fields a clinician or admin may edit on a patient record."""

    risk_level = forms.ChoiceField(
        choices=[("", _("Not assessed"))] + list(RiskLevel.choices),
        required=False,
    )
    conditions = forms.CharField(
        required=False,
        help_text=_("Comma-separated, e.g. hypertension, diabetes"),
    )
    clinician = forms.ModelChoiceField(
        queryset=User.objects.filter(role_assignment__role=Role.CLINICIAN).order_by("name"),
        required=False,
    )

    class Meta:
        model = Patient
        fields = ["risk_level", "conditions", "clinician"]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance and self.instance.pk and not self.is_bound:
            self.initial["conditions"] = ", ".join(self.instance.conditions or [])
        self.helper = FormHelper()
        self.helper.add_input(Submit("submit", _("Save")))

    def clean_risk_level(self):
        return self.cleaned_data.get("risk_level") or None

    def clean_conditions(self):
        return parse_conditions(self.cleaned_data.get("conditions", ""))
