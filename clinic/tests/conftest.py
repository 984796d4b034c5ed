import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from clinic.models import Patient, User
from clinic.services.accounts import issue_token


@pytest.fixture(autouse=True)
def _clear_cache():
    # throttle counters live in the cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def make_user(db):
    def _make(role, email=None, password='P@ssw0rd1', name=None):
        return User.objects.create_user(
            email=email or f'{role}@example.com',
            password=password,
            name=name or role.title(),
            role=role,
        )
    return _make


@pytest.fixture
def client_for():
    """Return an APIClient carrying a real bearer token for ``user``."""
    def _client(user):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_token(user)}')
        return client
    return _client


@pytest.fixture
def receptionist(make_user):
    return make_user(User.ROLE_RECEPTIONIST)


@pytest.fixture
def nurse(make_user):
    return make_user(User.ROLE_NURSE)


@pytest.fixture
def doctor(make_user):
    return make_user(User.ROLE_DOCTOR, name='Dr. Strange')


@pytest.fixture
def patient(db):
    return Patient.objects.create(
        nik='3201010101010001',
        name='Budi Santoso',
        gender='Male',
        blood_type='O',
        contact='08123456789',
    )
