from django.urls import path

from .views import exercise_complete_view
from .views import exercise_create_view
from .views import exercise_list_view
from .views import exercise_skip_view

app_name = "exercises"
urlpatterns = [
    path("", view=exercise_list_view, name="list"),
    path("assign/", view=exercise_create_view, name="create"),
    path("<int:pk>/complete/", view=exercise_complete_view, name="complete"),
    path("<int:pk>/skip/", view=exercise_skip_view, name="skip"),
]
