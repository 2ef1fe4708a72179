# intake/management/commands/seed_demo.py
from django.core.management.base import BaseCommand
from django.db import transaction

from intake.models import IntakeSubmission, Patient, User
from intake.roles import Role

DEMO_EMAIL = "admin@demo.com"
DEMO_PASSWORD = "DemoPass123!"

SAMPLE_FORMS = [
    {
        "status": IntakeSubmission.Status.NEW,
        "payload": {
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
                "conditions": ["High Blood Pressure", "Diabetes"],
                "medications": "Lisinopril 10mg daily, Metformin 500mg twice daily",
                "allergies": "Penicillin",
                "dentalSurgeries": "Wisdom teeth removed 2010",
            },
            "consent": {
                "hipaaAcknowledged": True,
                "treatmentConsent": True,
                "signatureText": "Jane Smith",
                "signatureDate": "2025-01-15",
            },
        },
    },
    {
        "status": IntakeSubmission.Status.REVIEWED,
        "payload": {
            "personalInfo": {
                "firstName": "Robert",
                "lastName": "Johnson",
                "dateOfBirth": "1975-11-22",
                "phone": "(555) 987-6543",
                "email": "rjohnson@example.com",
                "address": {"street": "456 Maple Drive", "city": "Portland", "state": "OR", "zip": "97201"},
            },
            "insuranceInfo": {"provider": "Cigna", "memberId": "CIG-112233", "groupNumber": "GRP-200"},
            "medicalHistory": {
                "conditions": ["Asthma"],
                "medications": "Albuterol inhaler as needed",
                "allergies": "None",
                "dentalSurgeries": "Root canal on tooth #19, 2018",
            },
            "consent": {
                "hipaaAcknowledged": True,
                "treatmentConsent": True,
                "signatureText": "Robert Johnson",
                "signatureDate": "2025-01-18",
            },
        },
    },
]


class Command(BaseCommand):
    help = "Seed the demo admin account and two sample submissions (idempotent)."

    def handle(self, *args, **opts):
        user, _ = User.objects.get_or_create(email=DEMO_EMAIL, defaults={"role": Role.ADMIN})
        # Reset password and role on every run so the demo login always works
        user.role = Role.ADMIN
        user.is_active = True
        user.set_password(DEMO_PASSWORD)
        user.save()
        self.stdout.write(self.style.SUCCESS(f"ok: {DEMO_EMAIL} / {DEMO_PASSWORD}"))

        with transaction.atomic():
            for form in SAMPLE_FORMS:
                personal = form["payload"]["personalInfo"]
                if Patient.objects.filter(email=personal["email"]).exists():
                    self.stdout.write(f"skip: {personal['email']} already seeded")
                    continue
                address = personal["address"]
                patient = Patient.objects.create(
                    first_name=personal["firstName"],
                    last_name=personal["lastName"],
                    date_of_birth=personal["dateOfBirth"],
                    phone=personal["phone"],
                    email=personal["email"],
                    address_street=address["street"],
                    address_city=address["city"],
                    address_state=address["state"],
                    address_zip=address["zip"],
                )
                IntakeSubmission.objects.create(patient=patient, json_payload=form["payload"], status=form["status"])
                self.stdout.write(self.style.SUCCESS(f"ok: submission for {personal['email']}"))
        self.stdout.write(self.style.SUCCESS("Seed complete."))
