import json
import logging

from django.contrib import messages
from django.http import JsonResponse
from django.shortcuts import redirect
from django.shortcuts import render
from django.urls import reverse
from django.views import View
from django.views.generic import ListView

from neuralcare.assessments.clock import RealClock
from neuralcare.assessments.engine import SequenceMemoryTest
from neuralcare.assessments.helpers.history import with_trends
from neuralcare.assessments.models import AssessmentResult
from neuralcare.assessments.registry import SEQUENCE_MEMORY
from neuralcare.assessments.registry import TEST_REGISTRY
from neuralcare.patients.helpers import get_patient_for_user
from neuralcare.users.access import RoleRequiredMixin
from neuralcare.users.models import Role

logger = logging.getLogger(__name__)

_ENGINE_SESSION_KEY = "sequence_memory_state"


class ResultHistoryView(RoleRequiredMixin, ListView):
    """
    Test results, newest first, each with its score variant and trend.

    Patients see their own results; clinicians see those of their patients.
    """

    allowed_roles = frozenset({Role.PATIENT, Role.CLINICIAN})
    template_name = "assessments/history.html"
    context_object_name = "results"
    paginate_by = 50

    def get_queryset(self):
        queryset = AssessmentResult.objects.select_related("patient__user").order_by("-date", "-created_at")
        if self.request.session_context.role == Role.PATIENT:
            return queryset.filter(patient__user=self.request.user)
        return queryset.filter(patient__clinician=self.request.user)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        page = context["page_obj"]
        next_older = None
        if page is not None and page.has_next():
            # end_index() is 1-based, so it addresses the first row of the next page.
            next_older = self.object_list[page.end_index()]
        context["rows"] = with_trends(context["results"], next_older=next_older)
        context["is_patient"] = self.request.session_context.role == Role.PATIENT
        context["tests"] = TEST_REGISTRY
        return context


result_history_view = ResultHistoryView.as_view()


class SequenceMemoryView(RoleRequiredMixin, View):
    """
    Renders the sequence-memory test page and starts a fresh playthrough.

    Any unfinished playthrough stored in the session is replaced.
    """

    allowed_roles = frozenset({Role.PATIENT})

    def get(self, request):
        if get_patient_for_user(request.user) is None:
            messages.error(request, "No patient record is linked to your account.")
            return redirect("assessments:history")
        engine = SequenceMemoryTest(clock=RealClock())
        _store_engine(request, engine)
        return render(
            request,
            "assessments/sequence_memory.html",
            {"test": TEST_REGISTRY[SEQUENCE_MEMORY], "snapshot": engine.snapshot().as_dict()},
        )


sequence_memory_view = SequenceMemoryView.as_view()


def _load_engine(request, **callbacks) -> SequenceMemoryTest | None:
    state = request.session.get(_ENGINE_SESSION_KEY)
    if state is None:
        return None
    return SequenceMemoryTest.from_state(state, clock=RealClock(), **callbacks)


def _store_engine(request, engine: SequenceMemoryTest) -> None:
    if engine.is_discarded:
        request.session.pop(_ENGINE_SESSION_KEY, None)
    else:
        request.session[_ENGINE_SESSION_KEY] = engine.to_state()


def _no_engine_response() -> JsonResponse:
    return JsonResponse({"error": "No test in progress"}, status=409)


class SequenceMemoryApiView(RoleRequiredMixin, View):
    """Base for the JSON endpoints that drive the engine stored in the session."""

    allowed_roles = frozenset({Role.PATIENT})


class SequenceMemoryStateView(SequenceMemoryApiView):
    """
    Current snapshot. Polled by the page.

    Read-only: due transitions are applied to a restored copy and never saved,
    so a poll overlapping a press cannot write stale state back.
    """

    def get(self, request):
        engine = _load_engine(request)
        if engine is None:
            return _no_engine_response()
        return JsonResponse(engine.snapshot().as_dict())


class SequenceMemoryStartView(SequenceMemoryApiView):
    def post(self, request):
        engine = _load_engine(request)
        if engine is None:
            return _no_engine_response()
        if not engine.start():
            return JsonResponse({"error": "Test already started"}, status=409)
        _store_engine(request, engine)
        return JsonResponse(engine.snapshot().as_dict())


class SequenceMemoryPressView(SequenceMemoryApiView):
    """
    Submit one symbol.

    Returns:
        200 snapshot after the press
        400 body is not JSON
        422 symbol missing or out of range
        409 no test in progress, or input is not being accepted right now
    """

    def post(self, request):
        try:
            data = json.loads(request.body)
        except (json.JSONDecodeError, ValueError):
            return JsonResponse({"error": "Invalid JSON"}, status=400)

        symbol = data.get("symbol") if isinstance(data, dict) else None
        if not isinstance(symbol, int) or isinstance(symbol, bool):
            return JsonResponse({"error": "symbol must be an integer"}, status=422)

        engine = _load_engine(request)
        if engine is None:
            return _no_engine_response()
        try:
            accepted = engine.press(symbol)
        except ValueError as exc:
            return JsonResponse({"error": str(exc)}, status=422)
        _store_engine(request, engine)
        if not accepted:
            return JsonResponse({"error": "Input not accepted", "state": engine.snapshot().as_dict()}, status=409)
        return JsonResponse(engine.snapshot().as_dict())


class SequenceMemoryCancelView(SequenceMemoryApiView):
    def post(self, request):
        engine = _load_engine(request)
        if engine is None:
            return _no_engine_response()
        if not engine.cancel():
            _store_engine(request, engine)
            return JsonResponse({"error": "Test cannot be cancelled now"}, status=409)
        _store_engine(request, engine)
        return JsonResponse({"cancelled": True, "redirect_url": reverse("assessments:history")})


class SequenceMemoryConfirmView(SequenceMemoryApiView):
    """
    Store the final score as an AssessmentResult.

    Returns:
        201 {"score": <int>, "result_id": <int>, "redirect_url": "..."}
        409 no finished test to confirm, or no patient record
    """

    def post(self, request):
        patient = get_patient_for_user(request.user)
        if patient is None:
            return JsonResponse({"error": "No patient record"}, status=409)

        saved = []

        def save_result(score: int) -> None:
            saved.append(
                AssessmentResult.objects.create(patient=patient, test_type=SEQUENCE_MEMORY, score=score)
            )

        engine = _load_engine(request, on_complete=save_result)
        if engine is None:
            return _no_engine_response()
        score = engine.confirm()
        if score is None:
            _store_engine(request, engine)
            return JsonResponse({"error": "Test is not finished"}, status=409)
        _store_engine(request, engine)

        result = saved[0]
        logger.info("Sequence memory result %s saved for patient %s: %s", result.pk, patient.pk, score)
        messages.success(request, f"Test saved. Your score: {score}/100")
        return JsonResponse(
            {"score": score, "result_id": result.pk, "redirect_url": reverse("assessments:history")},
            status=201,
        )


sequence_memory_state_view = SequenceMemoryStateView.as_view()
sequence_memory_start_view = SequenceMemoryStartView.as_view()
sequence_memory_press_view = SequenceMemoryPressView.as_view()
sequence_memory_cancel_view = SequenceMemoryCancelView.as_view()
sequence_memory_confirm_view = SequenceMemoryConfirmView.as_view()
