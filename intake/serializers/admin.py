from django.conf import settings
from rest_framework import serializers

from intake.models import IntakeSubmission, Patient


def _clamp(value, default: int, low: int, high: int) -> int:
    if value is None:
        return default
    return max(low, min(high, value))


class SubmissionListQuerySerializer(serializers.Serializer):
    """Query string of the submissions list and CSV export.

    ``page`` and ``limit`` are clamped into range rather than rejected;
    an unknown ``sort`` falls back to ``created_at`` and any ``order``
    other than ``asc`` sorts descending.
    """
    page = serializers.IntegerField(required=False)
    limit = serializers.IntegerField(required=False)
    status = serializers.ChoiceField(choices=IntakeSubmission.Status.choices, required=False)
    search = serializers.CharField(required=False, allow_blank=True)
    sort = serializers.CharField(required=False, allow_blank=True)
    order = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        conf = settings.INTAKE
        attrs['page'] = _clamp(attrs.get('page'), 1, 1, 2**31 - 1)
        attrs['limit'] = _clamp(attrs.get('limit'), conf.page_size_default, 1, conf.page_size_max)
        sort = attrs.get('sort') or 'created_at'
        attrs['sort'] = sort if sort in conf.sort_fields else 'created_at'
        attrs['order'] = 'asc' if attrs.get('order') == 'asc' else 'desc'
        attrs['search'] = (attrs.get('search') or '').strip()
        return attrs


class StatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=IntakeSubmission.Status.choices)


class PatientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Patient
        fields = [
            'id', 'first_name', 'last_name', 'date_of_birth', 'phone', 'email',
            'address_street', 'address_city', 'address_state', 'address_zip', 'created_at',
        ]


class SubmissionSerializer(serializers.ModelSerializer):
    """Submission row with its patient embedded under ``patients``, the key the dashboard reads."""
    patient_id = serializers.UUIDField(read_only=True)
    patients = PatientSerializer(source='patient', read_only=True)

    class Meta:
        model = IntakeSubmission
        fields = ['id', 'patient_id', 'status', 'created_at', 'updated_at', 'patients']
        read_only_fields = fields


class SubmissionDetailSerializer(SubmissionSerializer):
    class Meta(SubmissionSerializer.Meta):
        fields = SubmissionSerializer.Meta.fields + ['json_payload']
        read_only_fields = fields
