import pytest
from django.contrib.messages import get_messages
from django.urls import reverse


@pytest.mark.django_db
class TestHomePage:
    def test_anonymous_sees_landing_page(self, client):
        response = client.get(reverse("home"))
        assert response.status_code == 200

    def test_signed_in_user_goes_to_dashboard(self, client, user):
        client.force_login(user)
        response = client.get(reverse("home"))
        assert response.url == reverse("dashboard:home")


@pytest.mark.django_db
class TestReports:
    def test_patient_only(self, client, clinician):
        client.force_login(clinician)
        response = client.get(reverse("pages:reports"))
        assert response.url == reverse("dashboard:home")

    def test_generate_shows_coming_soon_message(self, client, patient):
        client.force_login(patient.user)

        response = client.post(reverse("pages:reports"))

        assert response.url == reverse("pages:reports")
        messages = [str(m) for m in get_messages(response.wsgi_request)]
        assert messages == ["PDF report generation feature will be available soon."]


@pytest.mark.django_db
class TestAdminSettings:
    def test_admin_sees_stub(self, client, admin_member):
        client.force_login(admin_member)
        response = client.get(reverse("pages:admin_settings"))
        assert b"Admin settings panel will be available soon." in response.content
