from rest_framework import serializers

from clinic.models import Checkup


class CheckupSerializer(serializers.ModelSerializer):
    """Validates checkup payloads.  The patient is resolved by the view."""
    type = serializers.ChoiceField(source='kind', choices=Checkup.KIND_CHOICES, required=False)
    vitalSigns = serializers.DictField(
        source='vital_signs', child=serializers.CharField(allow_blank=True, allow_null=True), required=False
    )
    doctorNotes = serializers.CharField(source='doctor_notes', required=False, allow_blank=True)
    aiResponse = serializers.JSONField(source='ai_response', required=False, allow_null=True)

    class Meta:
        model = Checkup
        fields = ['date', 'type', 'symptoms', 'vitalSigns', 'details', 'doctorNotes', 'notes', 'aiResponse']
        extra_kwargs = {
            'date': {'required': False},
            'symptoms': {'required': False, 'allow_blank': True},
            'details': {'required': False, 'allow_blank': True},
            'notes': {'required': False, 'allow_blank': True},
        }

    def to_internal_value(self, data):
        # Older clients send "General"/"Initial" as the type label
        if hasattr(data, 'get') and isinstance(data.get('type'), str):
            data = data.copy()
            data['type'] = data['type'].strip().lower()
        return super().to_internal_value(data)

    def validate_vitalSigns(self, v):
        unknown = set(v) - set(Checkup.VITAL_SIGN_KEYS)
        if unknown:
            raise serializers.ValidationError(f"unknown vital signs: {', '.join(sorted(unknown))}")
        return v

    def validate_aiResponse(self, v):
        if v is not None and not isinstance(v, dict):
            raise serializers.ValidationError('aiResponse must be an object')
        return v
