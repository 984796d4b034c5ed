import pytest

from clinic.models import Appointment, Checkup

pytestmark = pytest.mark.django_db


@pytest.fixture
def appointment(patient, doctor):
    return Appointment.objects.create(patient=patient, doctor=doctor, date_time='2024-06-01T09:00:00Z')


def test_receptionist_books_appointment(client_for, receptionist, doctor, patient):
    body = {'patient': patient.id, 'doctor': doctor.id, 'dateTime': '2024-06-01T10:30:00Z', 'notes': 'follow up'}
    r = client_for(receptionist).post('/api/appointments', body, format='json')
    assert r.status_code == 201
    assert r.data['patient']['name'] == 'Budi Santoso'
    assert r.data['doctor']['name'] == 'Dr. Strange'
    assert r.data['checkups'] == []
    assert r.data['notes'] == 'follow up'


def test_appointment_requires_date_time(client_for, receptionist, doctor, patient):
    r = client_for(receptionist).post(
        '/api/appointments', {'patient': patient.id, 'doctor': doctor.id}, format='json'
    )
    assert r.status_code == 400
    assert 'dateTime' in r.data['errors']


def test_appointment_doctor_must_have_doctor_role(client_for, receptionist, nurse, patient):
    body = {'patient': patient.id, 'doctor': nurse.id, 'dateTime': '2024-06-01T10:30:00Z'}
    r = client_for(receptionist).post('/api/appointments', body, format='json')
    assert r.status_code == 400
    assert 'doctor' in r.data['errors']


def test_appointments_listed_by_date(client_for, nurse, doctor, patient):
    later = Appointment.objects.create(patient=patient, doctor=doctor, date_time='2024-07-01T09:00:00Z')
    earlier = Appointment.objects.create(patient=patient, doctor=doctor, date_time='2024-06-01T09:00:00Z')
    r = client_for(nurse).get('/api/appointments')
    assert r.status_code == 200
    assert [a['id'] for a in r.data] == [earlier.id, later.id]


def test_appointments_for_patient(client_for, doctor, appointment, patient):
    r = client_for(doctor).get(f'/api/appointments/patient/{patient.id}')
    assert r.status_code == 200
    assert [a['id'] for a in r.data] == [appointment.id]


def test_doctor_updates_notes(client_for, doctor, appointment):
    r = client_for(doctor).put(f'/api/appointments/{appointment.id}', {'notes': 'seen'}, format='json')
    assert r.status_code == 200
    assert r.data['notes'] == 'seen'


def test_nurse_cannot_delete_appointment(client_for, nurse, appointment):
    assert client_for(nurse).delete(f'/api/appointments/{appointment.id}').status_code == 403


def test_delete_appointment(client_for, receptionist, appointment):
    r = client_for(receptionist).delete(f'/api/appointments/{appointment.id}')
    assert r.status_code == 200
    assert r.data['message'] == 'Appointment deleted successfully'
    assert not Appointment.objects.exists()


def test_initial_checkup_on_appointment_and_reset(client_for, nurse, appointment, patient):
    client = client_for(nurse)
    r = client.post(
        f'/api/appointments/{appointment.id}/checkups',
        {'temperature': '37.2', 'weight': '70'},
        format='json',
    )
    assert r.status_code == 201
    assert r.data['appointmentId'] == appointment.id

    detail = client.get(f'/api/appointments/{appointment.id}').data
    assert [c['temperature'] for c in detail['checkups']] == ['37.2']
    # the same record shows up on the patient
    patient_data = client.get(f'/api/patients/{patient.id}').data
    assert [c['id'] for c in patient_data['initialCheckups']] == [r.data['id']]

    r = client.post(f'/api/appointments/{appointment.id}/checkups/reset', {}, format='json')
    assert r.status_code == 200
    assert r.data['message'] == 'Initial checkup reset'
    assert not Checkup.objects.filter(appointment=appointment).exists()


def test_unknown_appointment_is_404(client_for, nurse):
    r = client_for(nurse).post('/api/appointments/77/checkups', {'temperature': '37'}, format='json')
    assert r.status_code == 404
    assert r.data['message'] == 'Appointment not found'
