from django.urls import path

from .views import result_history_view
from .views import sequence_memory_cancel_view
from .views import sequence_memory_confirm_view
from .views import sequence_memory_press_view
from .views import sequence_memory_start_view
from .views import sequence_memory_state_view
from .views import sequence_memory_view

app_name = "assessments"
urlpatterns = [
    path("", view=result_history_view, name="history"),
    path("sequence-memory/", view=sequence_memory_view, name="sequence_memory"),
    path("sequence-memory/api/state/", view=sequence_memory_state_view, name="sequence_memory_state"),
    path("sequence-memory/api/start/", view=sequence_memory_start_view, name="sequence_memory_start"),
    path("sequence-memory/api/press/", view=sequence_memory_press_view, name="sequence_memory_press"),
    path("sequence-memory/api/cancel/", view=sequence_memory_cancel_view, name="sequence_memory_cancel"),
    path("sequence-memory/api/confirm/", view=sequence_memory_confirm_view, name="sequence_memory_confirm"),
]
