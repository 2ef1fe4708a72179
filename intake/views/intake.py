"""
Public intake endpoint.

Anyone can post a completed intake form; no account is involved.  The
payload is validated, sanitized and stored as a new patient with a
``new`` submission.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from intake.serializers.intake import IntakeSubmissionSerializer
from intake.services.submissions import submit_intake


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def submit_intake_view(request):
    s = IntakeSubmissionSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    submission = submit_intake(s.validated_data)
    return Response({
        'ok': True,
        'message': 'Intake form submitted successfully',
        'submissionId': str(submission.id),
    }, status=status.HTTP_201_CREATED)
