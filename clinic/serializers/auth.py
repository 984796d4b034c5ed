import bleach
from rest_framework import serializers

from clinic.models import User


class RegisterSerializer(serializers.Serializer):
    role = serializers.CharField()
    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate_role(self, v):
        v = (v or '').strip().lower()
        if v not in dict(User.ROLE_CHOICES):
            raise serializers.ValidationError('role must be one of receptionist, nurse, doctor')
        return v

    def validate_name(self, v):
        v = bleach.clean((v or '').strip(), strip=True)
        if not v:
            raise serializers.ValidationError('name cannot be blank')
        return v

    def validate_email(self, v):
        return (v or '').strip().lower()


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField(trim_whitespace=False)
    selectedRole = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_email(self, v):
        v = (v or '').strip().lower()
        if not v:
            raise serializers.ValidationError('email cannot be blank')
        return v
