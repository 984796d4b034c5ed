import pytest

from clinic.models import Appointment, Checkup, Patient

pytestmark = pytest.mark.django_db

NEW_PATIENT = {
    'nik': '3201010101010099',
    'name': 'Ani Lestari',
    'gender': 'female',
    'birthdate': '1990-05-17',
    'bloodType': 'AB',
    'contact': '0811111111',
    'address': 'Jl. Merdeka 1',
    'medicalHistory': 'Asthma',
}


def test_receptionist_creates_and_retrieves_patient(client_for, receptionist):
    client = client_for(receptionist)
    r = client.post('/api/patients', NEW_PATIENT, format='json')
    assert r.status_code == 201
    assert r.data['gender'] == 'Female'
    assert r.data['bloodType'] == 'AB'
    assert r.data['initialCheckups'] == []
    pid = r.data['id']

    r = client.get(f'/api/patients/{pid}')
    assert r.status_code == 200
    assert r.data['nik'] == NEW_PATIENT['nik']
    assert r.data['medicalHistory'] == 'Asthma'
    assert isinstance(r.data['age'], int)


def test_duplicate_nik_is_rejected(client_for, receptionist, patient):
    body = dict(NEW_PATIENT, nik=patient.nik)
    r = client_for(receptionist).post('/api/patients', body, format='json')
    assert r.status_code == 400
    assert r.data['message'] == 'nik: Patient with this NIK already exists'
    assert Patient.objects.count() == 1


def test_future_birthdate_is_rejected(client_for, receptionist):
    r = client_for(receptionist).post('/api/patients', dict(NEW_PATIENT, birthdate='2999-01-01'), format='json')
    assert r.status_code == 400
    assert 'birthdate' in r.data['errors']


def test_nurse_cannot_create_patient(client_for, nurse):
    r = client_for(nurse).post('/api/patients', NEW_PATIENT, format='json')
    assert r.status_code == 403
    assert r.data['message']
    assert not Patient.objects.exists()


def test_any_role_lists_patients(client_for, doctor, patient):
    r = client_for(doctor).get('/api/patients')
    assert r.status_code == 200
    assert [p['id'] for p in r.data] == [patient.id]


def test_unknown_patient_is_404(client_for, doctor):
    r = client_for(doctor).get('/api/patients/999')
    assert r.status_code == 404
    assert r.data['message'] == 'Patient not found'


def test_update_patient_partial(client_for, nurse, patient):
    r = client_for(nurse).put(f'/api/patients/{patient.id}', {'contact': '0899999'}, format='json')
    assert r.status_code == 200
    patient.refresh_from_db()
    assert patient.contact == '0899999'
    assert patient.name == 'Budi Santoso'


def test_nurse_appends_initial_checkups(client_for, nurse, patient):
    client = client_for(nurse)
    first = {'date': '2024-03-01T08:00:00Z', 'temperature': '36.8', 'bloodPressure': '120/80', 'notes': 'ok'}
    second = {'date': '2024-03-02T08:00:00Z', 'heartRate': '88'}
    assert client.post(f'/api/patients/{patient.id}/checkups', first, format='json').status_code == 200
    r = client.post(f'/api/patients/{patient.id}/checkups', second, format='json')
    assert r.status_code == 200
    initial = r.data['initialCheckups']
    assert len(initial) == 2
    assert initial[0]['temperature'] == '36.8'
    assert initial[0]['notes'] == 'ok'
    assert initial[1]['heartRate'] == '88'
    assert initial[1]['temperature'] == ''
    assert Checkup.objects.filter(patient=patient, kind=Checkup.KIND_INITIAL).count() == 2


def test_receptionist_cannot_append_initial_checkup(client_for, receptionist, patient):
    r = client_for(receptionist).post(f'/api/patients/{patient.id}/checkups', {'temperature': '37'}, format='json')
    assert r.status_code == 403


def test_latest_checkup_missing_is_404(client_for, doctor, patient):
    r = client_for(doctor).get(f'/api/patients/{patient.id}/latest-checkup')
    assert r.status_code == 404
    assert r.data['message'] == 'No checkups found for this patient'


def test_latest_checkup_returns_newest(client_for, doctor, patient):
    Checkup.objects.create(patient=patient, date='2024-01-01T00:00:00Z', symptoms='cough')
    newest = Checkup.objects.create(patient=patient, date='2024-02-01T00:00:00Z', symptoms='fever')
    r = client_for(doctor).get(f'/api/patients/{patient.id}/latest-checkup')
    assert r.status_code == 200
    assert r.data['id'] == newest.id
    assert r.data['symptoms'] == 'fever'
    assert r.data['patient']['id'] == patient.id


def test_delete_patient_removes_checkups_and_appointments(client_for, receptionist, doctor, patient):
    Checkup.objects.create(patient=patient, symptoms='headache')
    Appointment.objects.create(patient=patient, doctor=doctor, date_time='2024-05-01T09:00:00Z')
    r = client_for(receptionist).delete(f'/api/patients/{patient.id}')
    assert r.status_code == 200
    assert r.data['message'] == 'Patient and associated checkups deleted'
    assert not Patient.objects.exists()
    assert not Checkup.objects.exists()
    assert not Appointment.objects.exists()


def test_doctor_cannot_delete_patient(client_for, doctor, patient):
    assert client_for(doctor).delete(f'/api/patients/{patient.id}').status_code == 403
    assert Patient.objects.filter(pk=patient.pk).exists()
