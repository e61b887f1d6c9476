"""Loosely typed views of ``yt-dlp --dump-json`` output.

Only the keys the service reads are declared; everything else yt-dlp emits
is ignored.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ExtractorFormat(BaseModel):
    model_config = ConfigDict(extra="ignore")

    format_id: str
    ext: Optional[str] = None
    vcodec: Optional[str] = None
    acodec: Optional[str] = None
    height: Optional[int] = None
    abr: Optional[float] = None
    filesize: Optional[float] = None
    filesize_approx: Optional[float] = None

    @property
    def has_video(self) -> bool:
        return self.vcodec != "none"

    @property
    def has_audio(self) -> bool:
        return self.acodec != "none"

    @property
    def size_bytes(self) -> Optional[float]:
        return self.filesize or self.filesize_approx or None


class ExtractorInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    title: str = "Unknown"
    thumbnail: Optional[str] = None
    duration: Optional[float] = None
    formats: List[ExtractorFormat] = Field(default_factory=list)
