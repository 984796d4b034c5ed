from __future__ import annotations

from clinic.models import Checkup, Patient


def format_checkup(checkup: Checkup) -> dict:
    return {
        'id': checkup.id,
        '_id': checkup.id,
        'patientId': checkup.patient_id,
        'appointmentId': checkup.appointment_id,
        'type': checkup.kind,
        'date': checkup.date.isoformat() if checkup.date else None,
        'symptoms': checkup.symptoms,
        'vitalSigns': {k: (checkup.vital_signs or {}).get(k) or '' for k in Checkup.VITAL_SIGN_KEYS},
        'details': checkup.details,
        'doctorNotes': checkup.doctor_notes,
        'notes': checkup.notes,
        'aiResponse': checkup.ai_response,
        'createdAt': checkup.created_at.isoformat() if checkup.created_at else None,
        'updatedAt': checkup.updated_at.isoformat() if checkup.updated_at else None,
    }


def checkups_for_patient(patient_id: int):
    return Checkup.objects.filter(patient_id=patient_id).order_by('-date', '-id')


def latest_checkup(patient: Patient) -> Checkup | None:
    return checkups_for_patient(patient.id).first()
