"""
Core views providing infrastructure endpoints.

This module contains views that are not part of the business domain but are
essential for application infrastructure, such as health checks.
"""

import logging

from django.db import DatabaseError, connection
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def health_check(request):
    """
    Health check endpoint for monitoring and orchestration.

    Returns:
        JsonResponse with status and component health:
        - status: "healthy" or "unhealthy"
        - database: "connected" or "disconnected"

    HTTP Status Codes:
        200: All systems operational
        503: Database unreachable
    """
    health_status = {
        "status": "healthy",
        "database": "unknown",
    }
    status_code = 200

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        health_status["database"] = "connected"
    except DatabaseError:
        logger.exception("Health check could not reach the database")
        health_status["database"] = "disconnected"
        health_status["status"] = "unhealthy"
        status_code = 503

    return JsonResponse(health_status, status=status_code)
