import bleach
from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from clinic.models import User


class UserUpdateSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(
        required=False,
        validators=[UniqueValidator(queryset=User.objects.all(), message='User already exists', lookup='iexact')],
    )

    class Meta:
        model = User
        fields = ['name', 'email']
        extra_kwargs = {'name': {'required': False}}

    def validate_name(self, v):
        return bleach.clean((v or '').strip(), strip=True)

    def validate_email(self, v):
        return (v or '').strip().lower()
