import logging

from django.contrib import messages
from django.shortcuts import get_object_or_404
from django.shortcuts import redirect
from django.urls import reverse
from django.views import View
from django.views.generic import ListView

from neuralcare.users.access import RoleRequiredMixin
from neuralcare.users.models import Role

from .forms import AssignExerciseForm
from .forms import CompleteExerciseForm
from .models import AssignedExercise
from .models import InvalidStatusTransition

logger = logging.getLogger(__name__)


class ExerciseListView(RoleRequiredMixin, ListView):
    """
    Clinicians see the exercises they assigned plus the assign form.
    Patients see their own assignments with complete/skip actions.
    """

    allowed_roles = frozenset({Role.CLINICIAN, Role.PATIENT})
    template_name = "exercises/exercise_list.html"
    context_object_name = "exercises"
    paginate_by = 20

    def is_clinician(self) -> bool:
        return self.request.session_context.role == Role.CLINICIAN

    def get_queryset(self):
        queryset = AssignedExercise.objects.select_related("patient__user", "clinician")
        if self.is_clinician():
            return queryset.filter(clinician=self.request.user)
        return queryset.filter(patient__user=self.request.user)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["is_clinician"] = self.is_clinician()
        if self.is_clinician():
            context.setdefault("form", AssignExerciseForm())
        return context


exercise_list_view = ExerciseListView.as_view()


class ExerciseCreateView(RoleRequiredMixin, View):
    allowed_roles = frozenset({Role.CLINICIAN})

    def get(self, request):
        return redirect(reverse("exercises:list"))

    def post(self, request):
        form = AssignExerciseForm(request.POST)
        if form.is_valid():
            exercise = form.save(commit=False)
            exercise.clinician = request.user
            exercise.save()
            logger.info("Exercise %s assigned to patient %s by %s", exercise.pk, exercise.patient_id, request.user.pk)
            messages.success(request, "Exercise assigned.")
            return redirect(reverse("exercises:list"))

        # Re-render the list with the bound form so field errors are shown.
        list_view = ExerciseListView()
        list_view.setup(request)
        list_view.object_list = list_view.get_queryset()
        context = list_view.get_context_data(form=form)
        return list_view.render_to_response(context, status=422)


exercise_create_view = ExerciseCreateView.as_view()


class ExerciseStatusView(RoleRequiredMixin, View):
    """Base for the patient's complete/skip actions on one of their exercises."""

    allowed_roles = frozenset({Role.PATIENT})
    success_message = ""

    def post(self, request, pk):
        exercise = get_object_or_404(AssignedExercise, pk=pk, patient__user=request.user)
        try:
            self.apply(request, exercise)
        except InvalidStatusTransition:
            messages.error(request, f"This exercise is already {exercise.get_status_display().lower()}.")
        except ValueError as exc:
            messages.error(request, str(exc))
        else:
            messages.success(request, self.success_message)
        return redirect(reverse("exercises:list"))

    def apply(self, request, exercise: AssignedExercise) -> None:
        raise NotImplementedError


class ExerciseCompleteView(ExerciseStatusView):
    success_message = "Exercise marked as completed."

    def apply(self, request, exercise):
        form = CompleteExerciseForm(request.POST)
        if not form.is_valid():
            raise ValueError("Score must be a whole number between 0 and 100.")
        exercise.mark_completed(score=form.cleaned_data.get("score"))


exercise_complete_view = ExerciseCompleteView.as_view()


class ExerciseSkipView(ExerciseStatusView):
    success_message = "Exercise skipped."

    def apply(self, request, exercise):
        exercise.mark_skipped()


exercise_skip_view = ExerciseSkipView.as_view()
