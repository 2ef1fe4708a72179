"""
Unit tests for the intake form serializers.  No database access.
"""
from intake.serializers.admin import SubmissionListQuerySerializer
from intake.serializers.intake import IntakeSubmissionSerializer
from intake.tests.helpers import JANE, intake_payload


def _errors(data):
    s = IntakeSubmissionSerializer(data=data)
    assert not s.is_valid()
    return s.errors


def test_valid_form_is_accepted_and_unknown_keys_dropped():
    data = intake_payload(extra={"foo": "bar"})
    data["personalInfo"]["nickname"] = "JJ"
    s = IntakeSubmissionSerializer(data=data)
    assert s.is_valid(), s.errors
    assert "extra" not in s.validated_data
    assert "nickname" not in s.validated_data["personalInfo"]
    assert s.validated_data["personalInfo"]["address"]["zip"] == "62701"


def test_missing_required_personal_field_is_named():
    for field in ("firstName", "lastName", "dateOfBirth", "phone", "email", "address"):
        data = intake_payload()
        del data["personalInfo"][field]
        errors = _errors(data)
        assert field in errors["personalInfo"], field


def test_blank_first_name_message():
    data = intake_payload()
    data["personalInfo"]["firstName"] = ""
    errors = _errors(data)
    assert str(errors["personalInfo"]["firstName"][0]) == "First name is required"


def test_length_bounds():
    data = intake_payload()
    data["personalInfo"]["lastName"] = "x" * 101
    data["personalInfo"]["phone"] = "12345"
    data["personalInfo"]["address"]["zip"] = "12"
    errors = _errors(data)
    assert "lastName" in errors["personalInfo"]
    assert "phone" in errors["personalInfo"]
    assert "zip" in errors["personalInfo"]["address"]


def test_date_and_email_formats():
    data = intake_payload()
    data["personalInfo"]["dateOfBirth"] = "03/15/1988"
    data["personalInfo"]["email"] = "not-an-email"
    errors = _errors(data)
    assert str(errors["personalInfo"]["dateOfBirth"][0]) == "Invalid date format (YYYY-MM-DD)"
    assert str(errors["personalInfo"]["email"][0]) == "Invalid email"


def test_incomplete_address_is_rejected():
    data = intake_payload()
    data["personalInfo"]["address"] = {"street": "1 Main St", "city": "Springfield"}
    errors = _errors(data)
    assert set(errors["personalInfo"]["address"]) == {"state", "zip"}


def test_consent_must_be_literal_true():
    for value in (False, "true", 1, "yes", None):
        data = intake_payload()
        data["consent"]["hipaaAcknowledged"] = value
        errors = _errors(data)
        assert "hipaaAcknowledged" in errors["consent"], value


def test_missing_consent_messages():
    data = intake_payload()
    del data["consent"]["hipaaAcknowledged"]
    data["consent"]["treatmentConsent"] = False
    errors = _errors(data)
    assert str(errors["consent"]["hipaaAcknowledged"][0]) == "HIPAA acknowledgment is required"
    assert str(errors["consent"]["treatmentConsent"][0]) == "Treatment consent is required"


def test_signature_rules():
    data = intake_payload()
    data["consent"]["signatureText"] = "J"
    data["consent"]["signatureDate"] = "2025-1-15"
    errors = _errors(data)
    assert str(errors["consent"]["signatureText"][0]) == "Typed signature is required"
    assert str(errors["consent"]["signatureDate"][0]) == "Invalid date"


def test_optional_sections_default_to_empty():
    data = {"personalInfo": JANE["personalInfo"], "consent": JANE["consent"]}
    s = IntakeSubmissionSerializer(data=data)
    assert s.is_valid(), s.errors
    assert s.validated_data["insuranceInfo"] == {"provider": "", "memberId": "", "groupNumber": ""}
    assert s.validated_data["medicalHistory"] == {
        "conditions": [],
        "medications": "",
        "allergies": "",
        "dentalSurgeries": "",
    }


def test_partial_optional_section_is_filled():
    data = intake_payload(insuranceInfo={"provider": "Cigna"})
    s = IntakeSubmissionSerializer(data=data)
    assert s.is_valid(), s.errors
    assert s.validated_data["insuranceInfo"] == {"provider": "Cigna", "memberId": "", "groupNumber": ""}


def test_optional_section_limits_still_apply():
    data = intake_payload(medicalHistory={"medications": "x" * 2001})
    errors = _errors(data)
    assert "medications" in errors["medicalHistory"]


def test_non_object_body_is_rejected():
    s = IntakeSubmissionSerializer(data=["not", "an", "object"])
    assert not s.is_valid()


def test_list_query_defaults_and_clamping():
    s = SubmissionListQuerySerializer(data={})
    assert s.is_valid(), s.errors
    assert s.validated_data["page"] == 1
    assert s.validated_data["limit"] == 20
    assert s.validated_data["sort"] == "created_at"
    assert s.validated_data["order"] == "desc"

    s = SubmissionListQuerySerializer(data={"page": "0", "limit": "500", "sort": "password", "order": "ASC"})
    assert s.is_valid(), s.errors
    assert s.validated_data["page"] == 1
    assert s.validated_data["limit"] == 100
    assert s.validated_data["sort"] == "created_at"
    assert s.validated_data["order"] == "desc"

    s = SubmissionListQuerySerializer(data={"limit": "-3", "sort": "status", "order": "asc"})
    assert s.is_valid(), s.errors
    assert s.validated_data["limit"] == 1
    assert (s.validated_data["sort"], s.validated_data["order"]) == ("status", "asc")


def test_list_query_rejects_unknown_status():
    s = SubmissionListQuerySerializer(data={"status": "archived"})
    assert not s.is_valid()
    assert "status" in s.errors
