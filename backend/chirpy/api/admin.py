"""Admin endpoints: hit metrics and development reset."""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, PlainTextResponse

from chirpy.api.deps import get_hit_counter, get_store
from chirpy.config import Settings, get_settings
from chirpy.errors import ForbiddenError
from chirpy.services.metrics import HitCounter, render_metrics_page
from chirpy.services.store import ChirpyStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/metrics", response_class=HTMLResponse)
def metrics(counter: HitCounter = Depends(get_hit_counter)):
    return render_metrics_page(counter.value)


@router.post("/reset", response_class=PlainTextResponse)
def reset(
    counter: HitCounter = Depends(get_hit_counter),
    store: ChirpyStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Reset the hit counter and delete every user. Only allowed when PLATFORM=dev."""
    if settings.platform != "dev":
        raise ForbiddenError("Reset is only allowed in the dev environment")
    deleted = store.delete_all_users()
    counter.reset()
    logger.info(f"Reset: removed {deleted} users")
    return "OK"
