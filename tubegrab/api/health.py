from fastapi import APIRouter

from tubegrab.core.state import state
from tubegrab.i18n import i18n

router = APIRouter()


@router.get("/health")
async def health_check():
    """Lightweight health check; reports yt-dlp readiness without failing"""
    return {
        "status": i18n.get("health.status"),
        "extractor": state.extractor.value,
        "ytdlp_version": state.ytdlp_version,
    }
