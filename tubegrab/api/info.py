from fastapi import APIRouter, Request, Depends
from tubegrab.api.deps import require_ready, translator
from tubegrab.core.errors import UpstreamFetchError
from tubegrab.core.logging import log_info, log_error
from tubegrab.models.request import InfoRequest
from tubegrab.models.response import VideoInfo
from tubegrab.services.info import VideoInfoService
from tubegrab.utils.locale import safe_url_for_log

router = APIRouter()

@router.post("/api/video-info", response_model=VideoInfo, dependencies=[Depends(require_ready)])
async def get_video_info(request: Request, video_request: InfoRequest):
    """Probe a video and list its curated formats"""
    _ = translator(request)

    log_info(request, _("log.fetching_info", url=safe_url_for_log(video_request.url)))

    try:
        video_info = await VideoInfoService.fetch(video_request.url)
    except UpstreamFetchError as e:
        log_error(request, f"Video info error: {e.message}: {e.details}")
        details = f"{e.message}: {e.details}" if e.details else e.message
        raise UpstreamFetchError(_("error.fetch_info_failed"), details=details) from e

    log_info(request, _("log.info_retrieved", title=video_info.title, count=len(video_info.formats)))
    return video_info
