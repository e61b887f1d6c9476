from typing import List, Optional, Sequence
from tubegrab.config.settings import config
from tubegrab.models.extractor import ExtractorFormat
from tubegrab.models.response import FormatOption
from tubegrab.utils.formatting import format_bytes, round_half_up


class FormatSelection:
    """Curate yt-dlp's format list into a handful of user-facing options"""

    @staticmethod
    def video_formats(formats: Sequence[ExtractorFormat]) -> List[FormatOption]:
        """
        One combined audio+video format per quality tier, best tier first.
        Tiers without an exact height match are left out.
        """
        combined = [
            f for f in formats
            if f.has_video and f.has_audio and f.ext == config.formats.video_ext
        ]

        options = []
        for tier in config.formats.quality_tiers:
            match = next((f for f in combined if f.height == tier), None)
            if match is None:
                continue
            options.append(FormatOption(
                quality=f"{tier}p",
                type="MP4",
                size=format_bytes(match.size_bytes),
                format="video",
                format_id=match.format_id,
            ))
        return options

    @staticmethod
    def audio_format(formats: Sequence[ExtractorFormat]) -> Optional[FormatOption]:
        """Single audio-only format with the highest bitrate; first one wins a tie"""
        best = None
        for f in formats:
            if not f.has_audio or f.has_video:
                continue
            if best is None or (f.abr or 0) > (best.abr or 0):
                best = f

        if best is None:
            return None

        bitrate = int(round_half_up(best.abr or config.formats.default_audio_bitrate))
        return FormatOption(
            quality=f"{bitrate}kbps",
            type="MP3",
            size=format_bytes(best.size_bytes),
            format="audio",
            format_id=best.format_id,
        )

    @staticmethod
    def curate(formats: Sequence[ExtractorFormat]) -> List[FormatOption]:
        options = FormatSelection.video_formats(formats)
        audio = FormatSelection.audio_format(formats)
        if audio is not None:
            options.append(audio)
        return options
