import pytest

from clinic.models import User

pytestmark = pytest.mark.django_db


def test_doctor_list_only_contains_doctors(client_for, receptionist, nurse, doctor):
    r = client_for(receptionist).get('/api/users/role/doctors')
    assert r.status_code == 200
    assert r.data == [{'id': doctor.id, '_id': doctor.id, 'name': 'Dr. Strange'}]


def test_users_list_never_exposes_passwords(client_for, nurse, doctor):
    r = client_for(nurse).get('/api/users')
    assert r.status_code == 200
    assert {u['email'] for u in r.data} == {'nurse@example.com', 'doctor@example.com'}
    assert all('password' not in u for u in r.data)


def test_user_detail(client_for, nurse, doctor):
    r = client_for(nurse).get(f'/api/users/{doctor.id}')
    assert r.data == {'id': doctor.id, '_id': doctor.id, 'name': 'Dr. Strange', 'role': 'doctor'}


def test_user_updates_own_profile(client_for, nurse):
    r = client_for(nurse).put(f'/api/users/{nurse.id}', {'name': 'Nadia'}, format='json')
    assert r.status_code == 200
    assert r.data['name'] == 'Nadia'


def test_user_cannot_update_someone_else(client_for, nurse, doctor):
    r = client_for(nurse).put(f'/api/users/{doctor.id}', {'name': 'Hacked'}, format='json')
    assert r.status_code == 403
    doctor.refresh_from_db()
    assert doctor.name == 'Dr. Strange'


def test_email_change_must_stay_unique(client_for, nurse, doctor):
    r = client_for(nurse).put(f'/api/users/{nurse.id}', {'email': 'DOCTOR@example.com'}, format='json')
    assert r.status_code == 400
    assert r.data['message'] == 'email: User already exists'


def test_user_deletes_own_account(client_for, receptionist, nurse):
    assert client_for(receptionist).delete(f'/api/users/{nurse.id}').status_code == 403
    r = client_for(nurse).delete(f'/api/users/{nurse.id}')
    assert r.status_code == 200
    assert not User.objects.filter(pk=nurse.pk).exists()


def test_ensure_test_users_command_is_idempotent():
    from django.core.management import call_command

    call_command('ensure_test_users')
    call_command('ensure_test_users', password='changed')
    assert User.objects.count() == 3
    doctor = User.objects.get(email='doctor@medilink.local')
    assert doctor.role == 'doctor'
    assert doctor.check_password('changed')
