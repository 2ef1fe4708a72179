from django.core.management.base import BaseCommand, CommandError

from intake.models import User
from intake.roles import Role


class Command(BaseCommand):
    help = "Create or reset a dashboard account (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--email", required=True)
        parser.add_argument("--password", required=True)
        parser.add_argument("--role", choices=Role.values, default=Role.ADMIN)

    def handle(self, *args, **opts):
        email = User.objects.normalize_email(opts["email"])
        if not email:
            raise CommandError("--email must not be empty")
        user, created = User.objects.get_or_create(
            email=email,
            defaults={"role": opts["role"], "is_active": True},
        )
        user.role = opts["role"]
        user.is_active = True
        user.set_password(opts["password"])
        user.save()
        verb = "created" if created else "updated"
        self.stdout.write(self.style.SUCCESS(f"{verb}: {user.email} ({user.role})"))
