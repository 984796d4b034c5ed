import bleach
from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from clinic.models import Room


class RoomSerializer(serializers.ModelSerializer):
    roomNumber = serializers.IntegerField(
        source='room_number',
        min_value=1,
        validators=[UniqueValidator(queryset=Room.objects.all(), message='A room with this number already exists')],
    )
    status = serializers.ChoiceField(choices=Room.STATUS_CHOICES, required=False)

    class Meta:
        model = Room
        fields = ['name', 'roomNumber', 'status']

    def validate_name(self, v):
        v = bleach.clean((v or '').strip(), strip=True)
        if not v:
            raise serializers.ValidationError('name cannot be blank')
        return v
