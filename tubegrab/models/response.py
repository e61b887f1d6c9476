from typing import List

from pydantic import BaseModel, ConfigDict, Field


class FormatOption(BaseModel):
    """One downloadable choice shown to the user"""
    model_config = ConfigDict(populate_by_name=True)

    quality: str
    type: str
    size: str
    format: str
    format_id: str = Field(..., alias="formatId")


class VideoInfo(BaseModel):
    """Video information response"""
    model_config = ConfigDict(populate_by_name=True)

    video_id: str = Field(..., alias="videoId")
    title: str
    thumbnail: str = ""
    duration: str
    formats: List[FormatOption] = []
