import bleach
from rest_framework import serializers

from clinic.models import Announcement


class UrgencyField(serializers.ChoiceField):
    """Accepts the enum value or the legacy boolean flag."""

    def to_internal_value(self, data):
        if isinstance(data, bool):
            return Announcement.URGENCY_URGENT if data else Announcement.URGENCY_NORMAL
        if isinstance(data, str):
            data = data.strip().lower()
        return super().to_internal_value(data)


class AnnouncementSerializer(serializers.ModelSerializer):
    """Board post.  Only ``content`` is required; the board form sends the
    urgency as a ``critical`` checkbox."""
    urgency = UrgencyField(choices=Announcement.URGENCY_CHOICES, required=False)

    class Meta:
        model = Announcement
        fields = ['title', 'content', 'urgency', 'author']
        extra_kwargs = {
            'title': {'required': False, 'allow_blank': True},
            'author': {'required': False},
        }

    def to_internal_value(self, data):
        if hasattr(data, 'get') and 'urgency' not in data and 'critical' in data:
            data = data.copy()
            data['urgency'] = data['critical']
        return super().to_internal_value(data)

    def validate_title(self, v):
        return bleach.clean((v or '').strip(), strip=True)

    def validate_content(self, v):
        v = bleach.clean((v or '').strip(), strip=True)
        if not v:
            raise serializers.ValidationError('content cannot be blank')
        return v
