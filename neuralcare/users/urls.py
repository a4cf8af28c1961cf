from django.urls import path

from .views import sign_out_view
from .views import user_detail_view
from .views import user_redirect_view
from .views import user_update_view

app_name = "users"
urlpatterns = [
    path("~redirect/", view=user_redirect_view, name="redirect"),
    path("~update/", view=user_update_view, name="update"),
    path("sign-out/", view=sign_out_view, name="sign_out"),
    path("<int:pk>/", view=user_detail_view, name="detail"),
]
