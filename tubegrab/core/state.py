from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ExtractorState(str, Enum):
    """Lifecycle of the yt-dlp binary lookup"""
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    FAILED = "failed"


@dataclass
class RuntimeState:
    """Centralized runtime state"""
    extractor: ExtractorState = ExtractorState.UNINITIALIZED
    ytdlp_binary: Optional[str] = None
    ytdlp_version: str = "unknown"

    @property
    def ready(self) -> bool:
        return self.extractor is ExtractorState.READY

    def mark_ready(self, binary: str, version: str) -> None:
        self.ytdlp_binary = binary
        self.ytdlp_version = version
        self.extractor = ExtractorState.READY

    def mark_failed(self) -> None:
        self.ytdlp_binary = None
        self.extractor = ExtractorState.FAILED

    def reset(self) -> None:
        self.extractor = ExtractorState.UNINITIALIZED
        self.ytdlp_binary = None
        self.ytdlp_version = "unknown"


state = RuntimeState()
