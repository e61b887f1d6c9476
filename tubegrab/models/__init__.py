from .extractor import ExtractorFormat, ExtractorInfo
from .request import InfoRequest
from .response import FormatOption, VideoInfo

__all__ = ["ExtractorFormat", "ExtractorInfo", "FormatOption", "InfoRequest", "VideoInfo"]
