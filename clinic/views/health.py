"""Liveness check used by the load balancer and container healthcheck."""
import time

import structlog
from django.conf import settings
from django.db import DatabaseError, connections
from django.http import JsonResponse

logger = structlog.get_logger(__name__)


def healthz(request):
    started = time.monotonic()
    try:
        with connections['default'].cursor() as cursor:
            cursor.execute('SELECT 1')
            row = cursor.fetchone()
    except DatabaseError as exc:
        logger.error('healthz_db_unreachable', error=str(exc))
        return JsonResponse({'status': 'error', 'database': 'unreachable'}, status=503)
    return JsonResponse({
        'status': 'ok',
        'database': 'ok' if row and row[0] == 1 else 'unexpected',
        'aiConfigured': bool(settings.GOOGLE_AI_API_KEY),
        'elapsedMs': round((time.monotonic() - started) * 1000, 1),
    })
