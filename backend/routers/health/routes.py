from fastapi import APIRouter
from typing import Any, Dict

from config import health_details_enabled
from .utils import build_health_payload

router = APIRouter(prefix="", tags=["health"])

HEALTH_ROUTE = "/health"


@router.get(HEALTH_ROUTE)
async def health_check() -> Dict[str, Any]:
    """Liveness/readiness probe used by the load balancer and orchestration layer."""
    return build_health_payload(include_details=health_details_enabled())
