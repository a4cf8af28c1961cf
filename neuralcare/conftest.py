import pytest

from neuralcare.patients.models import Patient
from neuralcare.patients.tests.factories import PatientFactory
from neuralcare.users.models import Role
from neuralcare.users.models import User
from neuralcare.users.tests.factories import UserFactory
from neuralcare.users.tests.factories import UserRoleFactory


@pytest.fixture(autouse=True)
def _media_storage(settings, tmpdir) -> None:
    settings.MEDIA_ROOT = tmpdir.strpath


@pytest.fixture
def user(db) -> User:
    return UserFactory()


@pytest.fixture
def patient(db) -> Patient:
    return PatientFactory()


@pytest.fixture
def clinician(db) -> User:
    return UserRoleFactory(role=Role.CLINICIAN).user


@pytest.fixture
def admin_member(db) -> User:
    return UserRoleFactory(role=Role.ADMIN).user
