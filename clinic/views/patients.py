"""
Patient record views.

Receptionists register and remove patients; every role may read them.
Nurses (and doctors) append initial checkups, which are stored as
``Checkup`` rows and returned as the patient's ``initialCheckups``.
"""
from __future__ import annotations

import structlog
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from clinic.models import Patient
from clinic.permissions import policy_for
from clinic.serializers.patient import InitialCheckupSerializer, PatientSerializer
from clinic.services.checkups import format_checkup, latest_checkup
from clinic.services.patients import (
    add_initial_checkup,
    delete_patient,
    format_patient,
    patients_with_checkups,
)
from clinic.shortcuts import get_object_or_404

logger = structlog.get_logger(__name__)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, policy_for('patients')])
def patients_collection(request):
    if request.method == 'GET':
        return Response([format_patient(p) for p in patients_with_checkups()])
    s = PatientSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    patient = s.save()
    logger.info('patient_created', patient_id=patient.id, by=request.user.id)
    return Response(format_patient(patient), status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, policy_for('patients')])
def patient_detail(request, pk: int):
    patient = get_object_or_404(Patient, pk, 'Patient', queryset=patients_with_checkups())
    if request.method == 'GET':
        return Response(format_patient(patient))
    if request.method == 'PUT':
        s = PatientSerializer(patient, data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        patient = s.save()
        return Response(format_patient(patient))
    # DELETE
    delete_patient(patient)
    return Response({'message': 'Patient and associated checkups deleted'})


@api_view(['POST'])
@permission_classes([IsAuthenticated, policy_for('patients', 'initial_checkup')])
def patient_initial_checkups(request, pk: int):
    """Append an initial checkup (vitals and notes) and return the patient."""
    patient = get_object_or_404(Patient, pk, 'Patient')
    s = InitialCheckupSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    add_initial_checkup(patient, s.validated_data)
    patient = patients_with_checkups().get(pk=patient.pk)
    return Response(format_patient(patient))


@api_view(['GET'])
@permission_classes([IsAuthenticated, policy_for('patients')])
def patient_latest_checkup(request, pk: int):
    patient = get_object_or_404(Patient, pk, 'Patient')
    checkup = latest_checkup(patient)
    if checkup is None:
        raise NotFound('No checkups found for this patient')
    data = format_checkup(checkup)
    data['patient'] = format_patient(patient, with_checkups=False)
    return Response(data)
