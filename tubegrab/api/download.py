from fastapi import APIRouter, Request, Depends, Query
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask
from tubegrab.api.deps import require_ready, translator
from tubegrab.core.errors import InvalidURLError, UpstreamFetchError
from tubegrab.core.logging import log_info, log_error
from tubegrab.core.security import SecurityValidator, UrlValidationResult
from tubegrab.services.stream import MEDIA_TYPE, StreamService
from tubegrab.utils.locale import safe_url_for_log

router = APIRouter()

@router.get("/api/download", dependencies=[Depends(require_ready)])
async def download_video(
    request: Request,
    url: str = Query(..., description="YouTube video URL"),
    format_id: str = Query(..., alias="formatId", description="Format identifier returned by /api/video-info"),
):
    """Stream the chosen format as an attachment"""
    _ = translator(request)

    if SecurityValidator.validate_url(url) != UrlValidationResult.OK:
        raise InvalidURLError(_("error.invalid_url"), details=_("error.invalid_url_reason"))

    log_info(request, _("log.starting_download", format_id=format_id, url=safe_url_for_log(url)))

    try:
        generator, headers, cleanup = await StreamService.stream(url, format_id, request)
    except UpstreamFetchError as e:
        reason = f"{e.message}: {e.details}" if e.details else e.message
        log_error(request, f"Download error: {reason}")
        raise UpstreamFetchError(_("error.download_failed", reason=reason)) from e

    return StreamingResponse(
        generator,
        media_type=MEDIA_TYPE,
        headers=headers,
        background=BackgroundTask(cleanup),
    )
