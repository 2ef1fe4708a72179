from collections.abc import Mapping

from rest_framework import serializers

DATE_PATTERN = r'^\d{4}-\d{2}-\d{2}$'


class LiteralTrueField(serializers.Field):
    """Accepts the JSON literal ``true`` and nothing else.

    ``BooleanField`` would coerce ``"true"``, ``1`` or ``"on"``; consent
    has to be given explicitly.
    """
    default_error_messages = {'required_true': 'This box must be checked.'}

    def to_internal_value(self, data):
        if data is not True:
            self.fail('required_true')
        return True

    def to_representation(self, value):
        return bool(value)


class AddressSerializer(serializers.Serializer):
    street = serializers.CharField(max_length=255)
    city = serializers.CharField(max_length=100)
    state = serializers.CharField(max_length=50)
    zip = serializers.CharField(min_length=3, max_length=20)


class PersonalInfoSerializer(serializers.Serializer):
    firstName = serializers.CharField(max_length=100, error_messages={'blank': 'First name is required', 'required': 'First name is required'})
    lastName = serializers.CharField(max_length=100, error_messages={'blank': 'Last name is required', 'required': 'Last name is required'})
    dateOfBirth = serializers.RegexField(DATE_PATTERN, error_messages={'invalid': 'Invalid date format (YYYY-MM-DD)'})
    phone = serializers.CharField(min_length=7, max_length=20, error_messages={'blank': 'Phone is required', 'min_length': 'Phone is required'})
    email = serializers.EmailField(max_length=255, error_messages={'invalid': 'Invalid email'})
    address = AddressSerializer()


class InsuranceInfoSerializer(serializers.Serializer):
    provider = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    memberId = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    groupNumber = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')


class MedicalHistorySerializer(serializers.Serializer):
    conditions = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False, default=list)
    medications = serializers.CharField(max_length=2000, required=False, allow_blank=True, default='')
    allergies = serializers.CharField(max_length=2000, required=False, allow_blank=True, default='')
    dentalSurgeries = serializers.CharField(max_length=2000, required=False, allow_blank=True, default='')


class ConsentSerializer(serializers.Serializer):
    hipaaAcknowledged = LiteralTrueField(error_messages={
        'required_true': 'HIPAA acknowledgment is required',
        'required': 'HIPAA acknowledgment is required',
    })
    treatmentConsent = LiteralTrueField(error_messages={
        'required_true': 'Treatment consent is required',
        'required': 'Treatment consent is required',
    })
    signatureText = serializers.CharField(min_length=2, max_length=200, error_messages={
        'blank': 'Typed signature is required',
        'min_length': 'Typed signature is required',
    })
    signatureDate = serializers.RegexField(DATE_PATTERN, error_messages={'invalid': 'Invalid date'})


class IntakeSubmissionSerializer(serializers.Serializer):
    """Full intake form as posted by the multi-step frontend.

    ``insuranceInfo`` and ``medicalHistory`` may be omitted; they are
    filled with empty defaults so the stored payload always has the same
    shape.
    """
    OPTIONAL_SECTIONS = ('insuranceInfo', 'medicalHistory')

    personalInfo = PersonalInfoSerializer()
    insuranceInfo = InsuranceInfoSerializer()
    medicalHistory = MedicalHistorySerializer()
    consent = ConsentSerializer()

    def to_internal_value(self, data):
        if isinstance(data, Mapping):
            data = dict(data)
            for section in self.OPTIONAL_SECTIONS:
                data.setdefault(section, {})
        return super().to_internal_value(data)
