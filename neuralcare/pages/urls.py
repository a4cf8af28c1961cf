from django.urls import path

from .views import admin_settings_view
from .views import reports_view

app_name = "pages"
urlpatterns = [
    path("reports/", view=reports_view, name="reports"),
    path("settings/", view=admin_settings_view, name="admin_settings"),
]
