import structlog  # type: ignore
from django.db import DatabaseError, connection  # type: ignore
from django.http import JsonResponse  # type: ignore
from django.utils import timezone  # type: ignore
from django.views.decorators.csrf import csrf_exempt  # type: ignore
from django.views.decorators.http import require_http_methods  # type: ignore

logger = structlog.get_logger(__name__)


@csrf_exempt
@require_http_methods(["GET"])
def healthz(request):
    """Liveness check for load balancers and containers"""
    timestamp = timezone.now().isoformat()
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
    except DatabaseError as exc:
        logger.error("healthz.fail", error=str(exc))
        return JsonResponse(
            {
                "success": False,
                "message": "Database unavailable",
                "database": "disconnected",
                "timestamp": timestamp,
            },
            status=503,
        )
    return JsonResponse(
        {
            "success": True,
            "message": "Server is running",
            "database": "connected",
            "timestamp": timestamp,
        },
        status=200,
    )
