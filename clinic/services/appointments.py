from __future__ import annotations

from clinic.models import Appointment, Checkup
from clinic.services.patients import format_initial_checkup


def _patient_summary(patient) -> dict:
    return {
        'id': patient.id,
        '_id': patient.id,
        'nik': patient.nik,
        'name': patient.name,
        'gender': patient.gender,
        'age': patient.age,
        'contact': patient.contact,
    }


def _doctor_summary(doctor) -> dict:
    return {'id': doctor.id, '_id': doctor.id, 'name': doctor.name, 'email': doctor.email}


def appointments_with_relations():
    return Appointment.objects.select_related('patient', 'doctor').prefetch_related('checkups')


def format_appointment(appointment: Appointment) -> dict:
    checkups = [c for c in appointment.checkups.all() if c.kind == Checkup.KIND_INITIAL]
    checkups.sort(key=lambda c: (c.date, c.id))
    return {
        'id': appointment.id,
        '_id': appointment.id,
        'patient': _patient_summary(appointment.patient),
        'doctor': _doctor_summary(appointment.doctor),
        'dateTime': appointment.date_time.isoformat(),
        'notes': appointment.notes,
        'checkups': [format_initial_checkup(c) for c in checkups],
        'createdAt': appointment.created_at.isoformat() if appointment.created_at else None,
        'updatedAt': appointment.updated_at.isoformat() if appointment.updated_at else None,
    }


def reset_initial_checkups(appointment: Appointment) -> int:
    deleted, _ = appointment.checkups.filter(kind=Checkup.KIND_INITIAL).delete()
    return deleted
