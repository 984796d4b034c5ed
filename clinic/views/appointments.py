"""
Appointment views.

Appointments join a patient and a doctor at a date/time.  Nurses attach
initial checkups to an appointment; those are ordinary checkup rows of
the patient linked to the appointment, and ``reset`` removes them.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from clinic.models import Appointment, Patient
from clinic.permissions import policy_for
from clinic.serializers.appointment import AppointmentSerializer
from clinic.serializers.patient import InitialCheckupSerializer
from clinic.services.appointments import (
    appointments_with_relations,
    format_appointment,
    reset_initial_checkups,
)
from clinic.services.patients import add_initial_checkup, format_initial_checkup
from clinic.shortcuts import get_object_or_404


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, policy_for('appointments')])
def appointments_collection(request):
    if request.method == 'GET':
        return Response([format_appointment(a) for a in appointments_with_relations()])
    s = AppointmentSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    appointment = s.save()
    appointment = appointments_with_relations().get(pk=appointment.pk)
    return Response(format_appointment(appointment), status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, policy_for('appointments')])
def appointment_detail(request, pk: int):
    appointment = get_object_or_404(Appointment, pk, 'Appointment', queryset=appointments_with_relations())
    if request.method == 'GET':
        return Response(format_appointment(appointment))
    if request.method == 'PUT':
        s = AppointmentSerializer(appointment, data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        s.save()
        appointment = appointments_with_relations().get(pk=appointment.pk)
        return Response(format_appointment(appointment))
    # DELETE
    appointment.delete()
    return Response({'message': 'Appointment deleted successfully'})


@api_view(['GET'])
@permission_classes([IsAuthenticated, policy_for('appointments')])
def patient_appointments(request, patient_id: int):
    patient = get_object_or_404(Patient, patient_id, 'Patient')
    qs = appointments_with_relations().filter(patient=patient)
    return Response([format_appointment(a) for a in qs])


@api_view(['POST'])
@permission_classes([IsAuthenticated, policy_for('appointments', 'initial_checkup')])
def appointment_checkups(request, pk: int):
    appointment = get_object_or_404(Appointment, pk, 'Appointment')
    s = InitialCheckupSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    checkup = add_initial_checkup(appointment.patient, s.validated_data, appointment=appointment)
    return Response(format_initial_checkup(checkup), status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([IsAuthenticated, policy_for('appointments', 'initial_checkup')])
def appointment_checkups_reset(request, pk: int):
    appointment = get_object_or_404(Appointment, pk, 'Appointment')
    reset_initial_checkups(appointment)
    return Response({'message': 'Initial checkup reset'})
