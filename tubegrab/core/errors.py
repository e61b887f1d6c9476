from typing import Optional


class TubegrabError(Exception):
    """Base error rendered as ``{"error": ..., "details": ...}``."""

    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)

    def to_body(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class NotReadyError(TubegrabError):
    """yt-dlp has not been located yet; the client may retry later."""
    status_code = 503


class InvalidURLError(TubegrabError):
    status_code = 400


class UpstreamFetchError(TubegrabError):
    """yt-dlp could not be run or exited with an error."""
    status_code = 500
