"""
Database models for the patient intake backend.

A public intake submission creates one :class:`Patient` and one
:class:`IntakeSubmission` pointing at it.  Staff accounts are
:class:`User` rows managed out of band, and every admin action leaves an
append-only :class:`ActivityLog` entry.
"""
from __future__ import annotations

import uuid
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models

from .roles import Role


class UserManager(BaseUserManager):
    """Manager for email-identified staff accounts."""

    use_in_migrations = True

    @classmethod
    def normalize_email(cls, email):
        return (email or '').strip().lower()

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError('An email address is required')
        user = self.model(email=self.normalize_email(email), **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('role', Role.STAFF)
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('role', Role.ADMIN)
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        return self._create_user(email, password, **extra_fields)


class User(AbstractUser):
    """Admin dashboard account identified by email.

    Both roles currently see the same dashboard; see
    :mod:`intake.roles` for the capability table.
    """
    username = None
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(max_length=255, unique=True)
    role = models.CharField(max_length=10, choices=Role.choices, default=Role.STAFF)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS: list[str] = []

    objects = UserManager()

    def __str__(self) -> str:
        return f"{self.email} ({self.role})"


class Patient(models.Model):
    """Identity, contact and address details captured by one intake form.

    Text columns are unbounded: input limits are enforced on the raw form,
    and sanitizing can lengthen a value by entity-escaping ``&`` and ``<``.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    first_name = models.TextField()
    last_name = models.TextField()
    # Kept as the submitted YYYY-MM-DD string
    date_of_birth = models.CharField(max_length=10)
    phone = models.TextField()
    email = models.TextField()
    address_street = models.TextField()
    address_city = models.TextField()
    address_state = models.TextField()
    address_zip = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['last_name', 'first_name'], name='intake_patient_name_idx'),
            models.Index(fields=['email'], name='intake_patient_email_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name}"


class IntakeSubmission(models.Model):
    """One completed intake form and its processing status."""

    class Status(models.TextChoices):
        NEW = 'new', 'New'
        REVIEWED = 'reviewed', 'Reviewed'
        COMPLETED = 'completed', 'Completed'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name='submissions')
    json_payload = models.JSONField(default=dict)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.NEW, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self) -> str:
        return f"{self.id} ({self.status})"


class ActivityLogError(Exception):
    """Raised when code tries to rewrite or remove an audit entry."""


class ActivityLog(models.Model):
    """Append-only record of an admin action."""
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='activity')
    action = models.CharField(max_length=64)
    metadata = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['action', 'created_at'], name='intake_activity_action_idx'),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ActivityLogError('activity log entries are immutable')
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ActivityLogError('activity log entries cannot be deleted')

    def __str__(self) -> str:
        return f"{self.action} by {self.user_id or 'anonymous'}"
