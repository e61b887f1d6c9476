import asyncio
import json

from pydantic import ValidationError

from tubegrab.config.settings import config
from tubegrab.core.errors import UpstreamFetchError
from tubegrab.models.extractor import ExtractorInfo
from tubegrab.models.response import VideoInfo
from tubegrab.services.format import FormatSelection
from tubegrab.services.ytdlp import YTDLPCommandBuilder, SubprocessExecutor
from tubegrab.utils.formatting import format_duration

STDERR_SNIPPET = 500


class VideoInfoService:
    """Video info fetching service"""

    @staticmethod
    async def probe(url: str) -> ExtractorInfo:
        """
        Run ``yt-dlp --dump-json`` for *url*.
        Every failure surfaces as UpstreamFetchError carrying yt-dlp's message.
        """
        cmd = YTDLPCommandBuilder.build_info_command(url)

        try:
            result = await SubprocessExecutor.run(cmd, timeout=config.download.probe_timeout)
        except asyncio.TimeoutError:
            raise UpstreamFetchError("yt-dlp timed out", details="metadata probe timed out")
        except OSError as e:
            raise UpstreamFetchError("yt-dlp could not be started", details=str(e))

        if result.returncode != 0:
            error_msg = result.stderr.decode(errors="replace").strip()
            raise UpstreamFetchError(
                "yt-dlp failed",
                details=error_msg[:STDERR_SNIPPET] or f"exit code {result.returncode}"
            )

        try:
            return ExtractorInfo.model_validate(json.loads(result.stdout.decode(errors="replace")))
        except (ValueError, ValidationError) as e:
            raise UpstreamFetchError("yt-dlp returned unreadable metadata", details=str(e)[:STDERR_SNIPPET])

    @staticmethod
    async def fetch(url: str) -> VideoInfo:
        """Probe *url* and curate its formats for display"""
        info = await VideoInfoService.probe(url)

        return VideoInfo(
            video_id=info.id,
            title=info.title,
            thumbnail=info.thumbnail or "",
            duration=format_duration(info.duration),
            formats=FormatSelection.curate(info.formats),
        )
