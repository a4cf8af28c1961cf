from django.urls import path

from .views import patient_detail_view
from .views import patient_list_view
from .views import patient_update_view

app_name = "patients"
urlpatterns = [
    path("", view=patient_list_view, name="list"),
    path("<int:pk>/", view=patient_detail_view, name="detail"),
    path("<int:pk>/edit/", view=patient_update_view, name="update"),
]
