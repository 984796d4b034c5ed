"""
Checkup views.

A checkup always belongs to an existing patient: creating one for an
unknown ``patientId`` answers 404 and writes nothing.
"""
from __future__ import annotations

import structlog
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from clinic.models import Checkup, Patient
from clinic.permissions import policy_for
from clinic.serializers.checkup import CheckupSerializer
from clinic.services.checkups import checkups_for_patient, format_checkup
from clinic.shortcuts import get_object_or_404

logger = structlog.get_logger(__name__)


def _body(request) -> dict:
    if not isinstance(request.data, dict):
        raise ValidationError('Expected a JSON object.')
    return request.data


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, policy_for('checkups')])
def checkups_collection(request):
    if request.method == 'GET':
        qs = Checkup.objects.all()
        kind = request.query_params.get('type')
        if kind:
            qs = qs.filter(kind=kind.lower())
        return Response([format_checkup(c) for c in qs])
    patient_id = _body(request).get('patientId')
    if patient_id in (None, ''):
        raise ValidationError({'patientId': ['This field is required.']})
    patient = get_object_or_404(Patient, patient_id, 'Patient')
    s = CheckupSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    checkup = s.save(patient=patient)
    logger.info('checkup_created', checkup_id=checkup.id, patient_id=patient.id, by=request.user.id)
    return Response(format_checkup(checkup), status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, policy_for('checkups')])
def checkup_detail(request, pk: int):
    checkup = get_object_or_404(Checkup, pk, 'Checkup')
    if request.method == 'GET':
        return Response(format_checkup(checkup))
    if request.method == 'PUT':
        moved_to = _body(request).get('patientId')
        if moved_to not in (None, '') and str(moved_to) != str(checkup.patient_id):
            raise ValidationError({'patientId': ['A checkup cannot be moved to another patient.']})
        s = CheckupSerializer(checkup, data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        checkup = s.save()
        return Response(format_checkup(checkup))
    # DELETE
    checkup.delete()
    return Response({'message': 'Checkup deleted'})


@api_view(['GET'])
@permission_classes([IsAuthenticated, policy_for('checkups')])
def patient_checkups(request, patient_id: int):
    """All checkups of one patient, newest first."""
    patient = get_object_or_404(Patient, patient_id, 'Patient')
    return Response([format_checkup(c) for c in checkups_for_patient(patient.id)])
