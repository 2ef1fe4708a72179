"""
Intake submission pipeline and the admin queries over its results.
"""
from __future__ import annotations

import csv
import logging
import math
from typing import Iterator, Optional

from django.db import DatabaseError
from django.db.models import Q, QuerySet
from rest_framework.exceptions import NotFound

from intake.exceptions import StorageError
from intake.models import IntakeSubmission, Patient
from intake.services.sanitize import sanitize_data

logger = logging.getLogger(__name__)

CSV_HEADER = 'Submission ID,Status,First Name,Last Name,DOB,Phone,Email,City,State,Created At'


def submit_intake(validated: dict) -> IntakeSubmission:
    """Persist a validated intake form as a patient plus a ``new`` submission.

    The two inserts are not wrapped in a transaction: when the patient
    insert fails nothing is written, but when the submission insert fails
    the patient row stays behind.  The orphan's id is logged so it can be
    reconciled by hand.
    """
    data = sanitize_data(validated)
    personal = data['personalInfo']
    address = personal['address']

    try:
        patient = Patient.objects.create(
            first_name=personal['firstName'],
            last_name=personal['lastName'],
            date_of_birth=personal['dateOfBirth'],
            phone=personal['phone'],
            email=personal['email'],
            address_street=address['street'],
            address_city=address['city'],
            address_state=address['state'],
            address_zip=address['zip'],
        )
    except DatabaseError as exc:
        logger.exception('patient insert failed')
        raise StorageError('Failed to save patient data') from exc

    try:
        submission = IntakeSubmission.objects.create(
            patient=patient,
            json_payload=data,
            status=IntakeSubmission.Status.NEW,
        )
    except DatabaseError as exc:
        logger.exception('submission insert failed, patient %s has no submission', patient.pk)
        raise StorageError('Failed to save submission') from exc

    logger.info('intake submission %s created for patient %s', submission.pk, patient.pk)
    return submission


def filter_submissions(*, status: Optional[str] = None, search: str = '',
                       sort: str = 'created_at', order: str = 'desc') -> QuerySet:
    qs = IntakeSubmission.objects.select_related('patient')
    if status:
        qs = qs.filter(status=status)
    if search:
        qs = qs.filter(
            Q(patient__first_name__icontains=search)
            | Q(patient__last_name__icontains=search)
            | Q(patient__email__icontains=search)
        )
    prefix = '' if order == 'asc' else '-'
    return qs.order_by(f'{prefix}{sort}', f'{prefix}id')


def paginate_submissions(qs: QuerySet, *, page: int, limit: int) -> tuple[list[IntakeSubmission], dict]:
    total = qs.count()
    start = (page - 1) * limit
    items = list(qs[start:start + limit])
    pagination = {
        'page': page,
        'limit': limit,
        'total': total,
        'totalPages': math.ceil(total / limit),
    }
    return items, pagination


def get_submission(submission_id) -> IntakeSubmission:
    submission = IntakeSubmission.objects.select_related('patient').filter(pk=submission_id).first()
    if not submission:
        raise NotFound('Submission not found')
    return submission


def set_submission_status(submission_id, status: str) -> tuple[IntakeSubmission, str]:
    """Move a submission to ``status`` and return it with its previous status.

    Any state may follow any other, including itself; ``updated_at`` is
    refreshed either way.
    """
    submission = get_submission(submission_id)
    previous = submission.status
    submission.status = status
    submission.save(update_fields=['status', 'updated_at'])
    return submission, previous


class _Echo:
    """Pseudo-buffer whose ``write`` hands the formatted line back."""

    def write(self, value):
        return value


def iter_csv_lines(qs: QuerySet) -> Iterator[str]:
    """Yield the export document line by line: header, then one quoted row per submission."""
    writer = csv.writer(_Echo(), quoting=csv.QUOTE_ALL, lineterminator='\n')
    yield CSV_HEADER + '\n'
    for sub in qs.iterator():
        p = sub.patient
        yield writer.writerow([
            sub.id,
            sub.status,
            p.first_name,
            p.last_name,
            p.date_of_birth,
            p.phone,
            p.email,
            p.address_city,
            p.address_state,
            sub.created_at.isoformat(),
        ])
