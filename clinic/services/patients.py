from __future__ import annotations

import structlog
from django.db import transaction
from django.utils import timezone

from clinic.models import Appointment, Checkup, Patient

logger = structlog.get_logger(__name__)


def format_initial_checkup(checkup: Checkup) -> dict:
    vitals = checkup.vital_signs or {}
    data = {
        'id': checkup.id,
        '_id': checkup.id,
        'date': checkup.date.isoformat() if checkup.date else None,
        'notes': checkup.notes,
        'appointmentId': checkup.appointment_id,
    }
    for key in Checkup.VITAL_SIGN_KEYS:
        data[key] = vitals.get(key) or ''
    return data


def format_patient(patient: Patient, *, with_checkups: bool = True) -> dict:
    data = {
        'id': patient.id,
        '_id': patient.id,
        'nik': patient.nik,
        'name': patient.name,
        'gender': patient.gender,
        'birthdate': patient.birthdate.isoformat() if patient.birthdate else None,
        'age': patient.age,
        'bloodType': patient.blood_type,
        'contact': patient.contact,
        'address': patient.address,
        'medicalHistory': patient.medical_history,
        'createdAt': patient.created_at.isoformat() if patient.created_at else None,
        'updatedAt': patient.updated_at.isoformat() if patient.updated_at else None,
    }
    if with_checkups:
        initial = [c for c in patient.checkups.all() if c.kind == Checkup.KIND_INITIAL]
        # oldest first, the order the records were taken
        initial.sort(key=lambda c: (c.date, c.id))
        data['initialCheckups'] = [format_initial_checkup(c) for c in initial]
    return data


def patients_with_checkups():
    return Patient.objects.prefetch_related('checkups')


def add_initial_checkup(patient: Patient, data: dict, *, appointment: Appointment | None = None) -> Checkup:
    """Record a nurse's vitals for ``patient`` (optionally under an appointment)."""
    vitals = {k: data[k] for k in Checkup.VITAL_SIGN_KEYS if data.get(k) not in (None, '')}
    checkup = Checkup.objects.create(
        patient=patient,
        appointment=appointment,
        kind=Checkup.KIND_INITIAL,
        date=data.get('date') or timezone.now(),
        vital_signs=vitals,
        notes=data.get('notes') or '',
    )
    logger.info('initial_checkup_recorded', patient_id=patient.id, checkup_id=checkup.id,
                appointment_id=appointment.id if appointment else None)
    return checkup


def delete_patient(patient: Patient) -> None:
    """Remove a patient together with their checkups and appointments."""
    pid = patient.id
    with transaction.atomic():
        checkups, _ = Checkup.objects.filter(patient_id=pid).delete()
        appointments, _ = Appointment.objects.filter(patient_id=pid).delete()
        patient.delete()
    logger.info('patient_deleted', patient_id=pid, checkups=checkups, appointments=appointments)
