import copy
from datetime import datetime, timezone as dt_timezone

from rest_framework.test import APIClient

from intake.authentication import issue_access_token
from intake.models import IntakeSubmission, Patient

JANE = {
    "personalInfo": {
        "firstName": "Jane",
        "lastName": "Smith",
        "dateOfBirth": "1988-03-15",
        "phone": "(555) 123-4567",
        "email": "jane.smith@example.com",
        "address": {"street": "123 Oak Avenue", "city": "Springfield", "state": "IL", "zip": "62701"},
    },
    "insuranceInfo": {"provider": "Delta Dental", "memberId": "DD-998877", "groupNumber": "GRP-100"},
    "medicalHistory": {
        "conditions": ["High Blood Pressure"],
        "medications": "Lisinopril 10mg daily",
        "allergies": "Penicillin",
        "dentalSurgeries": "",
    },
    "consent": {
        "hipaaAcknowledged": True,
        "treatmentConsent": True,
        "signatureText": "Jane Smith",
        "signatureDate": "2025-01-15",
    },
}


def intake_payload(**sections):
    """Deep copy of a valid intake form with whole sections replaced."""
    data = copy.deepcopy(JANE)
    data.update(sections)
    return data


def create_submission(first="Jane", last="Smith", email="jane@example.com", status="new", created=None, **patient_fields):
    patient = Patient.objects.create(
        first_name=first,
        last_name=last,
        date_of_birth=patient_fields.pop("date_of_birth", "1990-01-01"),
        phone=patient_fields.pop("phone", "555-0100"),
        email=email,
        address_street=patient_fields.pop("address_street", "1 Main St"),
        address_city=patient_fields.pop("address_city", "Springfield"),
        address_state=patient_fields.pop("address_state", "IL"),
        address_zip=patient_fields.pop("address_zip", "62701"),
    )
    sub = IntakeSubmission.objects.create(patient=patient, status=status, json_payload={"personalInfo": {"firstName": first}})
    if created is not None:
        IntakeSubmission.objects.filter(pk=sub.pk).update(created_at=created)
        sub.refresh_from_db()
    return sub


def at(day: int) -> datetime:
    return datetime(2025, 1, day, 12, 0, tzinfo=dt_timezone.utc)


def auth_client(user) -> APIClient:
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_access_token(user)}")
    return client
