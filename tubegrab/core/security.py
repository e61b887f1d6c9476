import re
from enum import Enum, auto

YOUTUBE_URL_PATTERN = re.compile(r'^(https?://)?(www\.)?(youtube\.com|youtu\.be)/.+')


class UrlValidationResult(Enum):
    """URL validation result without throwing exceptions"""
    OK = auto()
    EMPTY = auto()
    INVALID = auto()


class SecurityValidator:
    """Loose host check applied before yt-dlp is ever invoked"""

    @staticmethod
    def validate_url(url: str) -> UrlValidationResult:
        if not url or not url.strip():
            return UrlValidationResult.EMPTY
        if not YOUTUBE_URL_PATTERN.match(url.strip()):
            return UrlValidationResult.INVALID
        return UrlValidationResult.OK
