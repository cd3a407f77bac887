from fastapi import APIRouter, Depends
from typing import Any

from tailorbook.api import deps
from tailorbook.core.config import Settings
from tailorbook.core.timeutils import utcnow

router = APIRouter()

@router.get("", response_model=dict[str, Any])
def health_check(settings: Settings = Depends(deps.get_settings)) -> Any:
    """
    Health check endpoint.
    """
    return {"status": "ok", "environment": settings.ENVIRONMENT, "timestamp": utcnow().isoformat()}
