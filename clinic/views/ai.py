"""
Diagnosis-assistance endpoints.

``analyze-checkup`` forwards a doctor's clinical notes to the generative
model and returns a normalised analysis.  Failures that the caller can
act on map to distinct statuses (configuration 500, quota 429, safety
400); everything else degrades to a 200 fallback body flagged with
``error: true`` so the UI always has something to render.
"""
from __future__ import annotations

import structlog
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from clinic.models import Checkup
from clinic.permissions import policy_for
from clinic.serializers.ai import AnalyzeCheckupSerializer
from clinic.services.ai import (
    ANALYSIS_VERSION,
    MAX_DIAGNOSES,
    AIConfigurationError,
    AIRateLimitError,
    AISafetyBlockError,
    AIServiceError,
    GenerativeModelClient,
    analyze_checkup as run_analysis,
    fallback_analysis,
    has_sufficient_data,
)
from clinic.shortcuts import get_object_or_404
from clinic.throttling import AIAnalysisRateThrottle

logger = structlog.get_logger(__name__)

INSUFFICIENT_DATA = (
    'Insufficient data for analysis. Please provide checkup details, '
    'symptoms, vital signs, or doctor notes.'
)
CONFIGURATION_ERROR = 'AI service configuration error. Please contact system administrator.'
RATE_LIMITED = 'AI service is temporarily busy. Please try again in a few minutes.'
SAFETY_BLOCKED = 'The AI service declined to analyse this content. Please review the input and try again.'
MANUAL_REVIEW = 'AI analysis failed - manual review required'

HEALTH_PROMPT = 'Reply with the single word OK.'


@api_view(['POST'])
@permission_classes([IsAuthenticated, policy_for('ai', 'create')])
@throttle_classes([AIAnalysisRateThrottle])
def analyze_checkup(request):
    s = AnalyzeCheckupSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = s.validated_data
    if not has_sufficient_data(data):
        return Response({'message': INSUFFICIENT_DATA}, status=status.HTTP_400_BAD_REQUEST)

    checkup = None
    if data.get('checkupId'):
        checkup = get_object_or_404(Checkup, data['checkupId'], 'Checkup')

    client = GenerativeModelClient.from_settings()
    try:
        analysis = run_analysis(data, client)
    except AIConfigurationError as exc:
        logger.error('ai_analysis_failed', kind=exc.kind, error=str(exc))
        return Response({'message': CONFIGURATION_ERROR}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    except AIRateLimitError as exc:
        logger.warning('ai_analysis_failed', kind=exc.kind, error=str(exc))
        return Response({'message': RATE_LIMITED}, status=status.HTTP_429_TOO_MANY_REQUESTS)
    except AISafetyBlockError as exc:
        logger.warning('ai_analysis_failed', kind=exc.kind, error=str(exc))
        return Response({'message': SAFETY_BLOCKED}, status=status.HTTP_400_BAD_REQUEST)
    except AIServiceError as exc:
        logger.warning('ai_analysis_failed', kind=exc.kind, error=str(exc))
        body = fallback_analysis(client.model)
        body.update({'error': True, 'errorType': exc.kind, 'message': MANUAL_REVIEW})
        return Response(body)

    if checkup is not None:
        checkup.ai_response = analysis
        checkup.save(update_fields=['ai_response', 'updated_at'])
    logger.info(
        'ai_analysis_succeeded',
        model=client.model,
        diagnoses=len(analysis['possibleDiagnoses']),
        checkup_id=checkup.id if checkup else None,
    )
    return Response(analysis)


@api_view(['GET'])
@permission_classes([IsAuthenticated, policy_for('ai', 'read')])
def ai_health(request):
    client = GenerativeModelClient.from_settings()
    if not client.configured:
        return Response(
            {'status': 'unavailable', 'message': 'GOOGLE_AI_API_KEY is not configured', 'model': client.model},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    try:
        answer = client.generate(HEALTH_PROMPT)
    except AIServiceError as exc:
        logger.warning('ai_health_check_failed', kind=exc.kind, error=str(exc))
        return Response(
            {'status': 'unhealthy', 'errorType': exc.kind, 'model': client.model},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    if 'ok' in answer.lower():
        return Response({'status': 'healthy', 'model': client.model})
    return Response({'status': 'degraded', 'model': client.model}, status=status.HTTP_503_SERVICE_UNAVAILABLE)


@api_view(['GET'])
@permission_classes([IsAuthenticated, policy_for('ai', 'read')])
def ai_stats(request):
    client = GenerativeModelClient.from_settings()
    return Response({
        'service': 'diagnosis-assistance',
        'model': client.model,
        'configured': client.configured,
        'analysisVersion': ANALYSIS_VERSION,
        'maxDiagnoses': MAX_DIAGNOSES,
        'timeoutSeconds': client.timeout,
        'features': [
            'possible diagnoses',
            'recommended actions',
            'risk factors',
            'follow-up recommendations',
            'confidence score',
        ],
    })
