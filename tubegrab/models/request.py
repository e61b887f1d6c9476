from pydantic import BaseModel, Field, field_validator
from tubegrab.core.security import SecurityValidator, UrlValidationResult


class InfoRequest(BaseModel):
    url: str = Field(..., description="YouTube video URL")

    @field_validator('url')
    @classmethod
    def validate_youtube_url(cls, v):
        """Reject empty and non-YouTube URLs before yt-dlp runs"""
        result = SecurityValidator.validate_url(v)
        if result == UrlValidationResult.EMPTY:
            raise ValueError("URL must not be empty")
        if result == UrlValidationResult.INVALID:
            raise ValueError("URL must point to youtube.com or youtu.be")
        return v.strip()
