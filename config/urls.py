from django.conf import settings
from django.contrib import admin
from django.urls import include
from django.urls import path

from neuralcare.pages.views import home_view

urlpatterns = [
    path("", home_view, name="home"),
    # Django Admin
    path(settings.ADMIN_URL, admin.site.urls),
    # User management
    path("users/", include("neuralcare.users.urls", namespace="users")),
    path("accounts/", include("allauth.urls")),
    # Your stuff: custom urls includes go here
    path("dashboard/", include("neuralcare.dashboard.urls", namespace="dashboard")),
    path("patients/", include("neuralcare.patients.urls", namespace="patients")),
    path("exercises/", include("neuralcare.exercises.urls", namespace="exercises")),
    path("tests/", include("neuralcare.assessments.urls", namespace="assessments")),
    path("", include("neuralcare.pages.urls", namespace="pages")),
]
