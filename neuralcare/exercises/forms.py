import django.forms as forms
from crispy_forms.helper import FormHelper
from crispy_forms.layout import Submit
from django.forms import ModelForm
from django.utils.translation import gettext_lazy as _

from neuralcare.patients.models import Patient

from .models import AssignedExercise


class AssignExerciseForm(ModelForm):
    # Declared explicitly so Django never auto-inserts a blank "-------" option.
    exercise_type = forms.ChoiceField(choices=AssignedExercise.ExerciseType.choices)

    class Meta:
        model = AssignedExercise
        fields = [
            "patient",
            "title",
            "exercise_type",
            "description",
            "instructions",
            "duration_minutes",
        ]
        widgets = {
            "description": forms.Textarea(attrs={"rows": 3}),
            "instructions": forms.Textarea(attrs={"rows": 3}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["patient"].queryset = Patient.objects.select_related("user").order_by("user__name")
        self.helper = FormHelper()
        self.helper.form_action = "exercises:create"
        self.helper.add_input(Submit("submit", _("Assign Exercise")))


class CompleteExerciseForm(forms.Form):
    score = forms.IntegerField(min_value=0, max_value=100, required=False)
