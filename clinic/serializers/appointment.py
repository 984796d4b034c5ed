from rest_framework import serializers

from clinic.models import Appointment, Patient, User


class AppointmentSerializer(serializers.ModelSerializer):
    patient = serializers.PrimaryKeyRelatedField(queryset=Patient.objects.all())
    doctor = serializers.PrimaryKeyRelatedField(queryset=User.objects.filter(role=User.ROLE_DOCTOR))
    dateTime = serializers.DateTimeField(source='date_time')

    class Meta:
        model = Appointment
        fields = ['patient', 'doctor', 'dateTime', 'notes']
        extra_kwargs = {'notes': {'required': False, 'allow_blank': True}}
