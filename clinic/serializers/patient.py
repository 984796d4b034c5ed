import bleach
from django.utils import timezone
from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from clinic.models import Patient


class PatientSerializer(serializers.ModelSerializer):
    """Validates patient create/update payloads (camelCase on the wire)."""
    nik = serializers.CharField(
        max_length=32,
        validators=[UniqueValidator(queryset=Patient.objects.all(), message='Patient with this NIK already exists')],
    )
    gender = serializers.CharField(required=False, allow_blank=True)
    bloodType = serializers.ChoiceField(
        source='blood_type', choices=Patient.BLOOD_TYPE_CHOICES, required=False, allow_blank=True
    )
    medicalHistory = serializers.CharField(source='medical_history', required=False, allow_blank=True)

    class Meta:
        model = Patient
        fields = ['nik', 'name', 'gender', 'birthdate', 'bloodType', 'contact', 'address', 'medicalHistory']
        extra_kwargs = {
            'birthdate': {'required': False, 'allow_null': True},
            'contact': {'required': False, 'allow_blank': True},
            'address': {'required': False, 'allow_blank': True},
        }

    def validate_nik(self, v):
        v = (v or '').strip()
        if not v:
            raise serializers.ValidationError('NIK cannot be blank')
        return v

    def validate_name(self, v):
        v = bleach.clean((v or '').strip(), strip=True)
        if not v:
            raise serializers.ValidationError('name cannot be blank')
        return v

    def validate_gender(self, v):
        if not v:
            return ''
        for value, _ in Patient.GENDER_CHOICES:
            if v.strip().lower() == value.lower():
                return value
        raise serializers.ValidationError('gender must be Male, Female or Other')

    def validate_birthdate(self, v):
        if v and v > timezone.localdate():
            raise serializers.ValidationError('birthdate cannot be in the future')
        return v


class InitialCheckupSerializer(serializers.Serializer):
    """A nurse's vitals record, flat as the front-end sends it."""
    date = serializers.DateTimeField(required=False)
    temperature = serializers.CharField(required=False, allow_blank=True, max_length=32)
    bloodPressure = serializers.CharField(required=False, allow_blank=True, max_length=32)
    heartRate = serializers.CharField(required=False, allow_blank=True, max_length=32)
    weight = serializers.CharField(required=False, allow_blank=True, max_length=32)
    height = serializers.CharField(required=False, allow_blank=True, max_length=32)
    notes = serializers.CharField(required=False, allow_blank=True)
