from datetime import timedelta

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from clinic.models import User
from clinic.services.accounts import issue_token

pytestmark = pytest.mark.django_db


def register(client, **overrides):
    body = {'role': 'nurse', 'name': 'Siti', 'email': 'siti@example.com', 'password': 'secret123'}
    body.update(overrides)
    return client.post('/api/auth/register', body, format='json')


def test_register_creates_user_with_hashed_password():
    client = APIClient()
    r = register(client, email='Siti@Example.com')
    assert r.status_code == 201
    assert r.data == {'message': 'User registered successfully'}
    user = User.objects.get(email='siti@example.com')
    assert user.role == 'nurse'
    assert user.password != 'secret123'
    assert user.check_password('secret123')


def test_register_duplicate_email_is_rejected():
    client = APIClient()
    assert register(client).status_code == 201
    r = register(client, email='SITI@example.com')
    assert r.status_code == 400
    assert r.data['message'] == 'User already exists'
    assert User.objects.count() == 1


def test_register_rejects_unknown_role():
    r = register(APIClient(), role='admin')
    assert r.status_code == 400
    assert r.data['message'].startswith('role:')


def test_login_returns_token_with_id_and_role(doctor):
    r = APIClient().post(
        '/api/auth/login',
        {'email': 'doctor@example.com', 'password': 'P@ssw0rd1', 'selectedRole': 'Doctor'},
        format='json',
    )
    assert r.status_code == 200
    assert r.data['user']['role'] == 'doctor'
    assert r.data['user']['email'] == 'doctor@example.com'
    token = AccessToken(r.data['token'])
    assert token['id'] == doctor.id
    assert token['id'] == r.data['user']['id']
    assert token['role'] == 'doctor'


def test_login_role_mismatch_is_401(nurse):
    r = APIClient().post(
        '/api/auth/login',
        {'email': 'nurse@example.com', 'password': 'P@ssw0rd1', 'selectedRole': 'doctor'},
        format='json',
    )
    assert r.status_code == 401
    assert r.data['message'] == 'Role mismatch. Please choose the correct role.'
    assert 'token' not in r.data


@pytest.mark.parametrize('email,password', [
    ('nurse@example.com', 'wrong'),
    ('nobody@example.com', 'P@ssw0rd1'),
])
def test_login_bad_credentials_is_401(nurse, email, password):
    r = APIClient().post('/api/auth/login', {'email': email, 'password': password}, format='json')
    assert r.status_code == 401
    assert r.data['message'] == 'Invalid credentials'


def test_login_ignores_stale_authorization_header(nurse):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')
    r = client.post('/api/auth/login', {'email': 'nurse@example.com', 'password': 'P@ssw0rd1'}, format='json')
    assert r.status_code == 200


def test_profile_requires_token():
    r = APIClient().get('/api/auth/profile')
    assert r.status_code == 401
    assert 'message' in r.data


def test_profile_with_valid_token(client_for, receptionist):
    r = client_for(receptionist).get('/api/auth/profile')
    assert r.status_code == 200
    assert r.data['id'] == receptionist.id
    assert r.data['role'] == 'receptionist'


def test_malformed_token_is_401():
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION='Bearer abc.def.ghi')
    r = client.get('/api/patients')
    assert r.status_code == 401


def test_expired_token_is_401(receptionist):
    token = AccessToken.for_user(receptionist)
    token['role'] = receptionist.role
    token.set_exp(lifetime=-timedelta(minutes=5))
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    assert client.get('/api/patients').status_code == 401


def test_token_rejected_after_role_change(receptionist):
    token = issue_token(receptionist)
    receptionist.role = User.ROLE_NURSE
    receptionist.save(update_fields=['role'])
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    r = client.get('/api/patients')
    assert r.status_code == 401


def test_healthz_is_public():
    r = APIClient().get('/healthz')
    assert r.status_code == 200
    assert r.json()['status'] == 'ok'


def test_request_id_header_is_echoed(client_for, nurse):
    r = client_for(nurse).get('/api/rooms', HTTP_X_REQUEST_ID='abc123')
    assert r['X-Request-ID'] == 'abc123'
