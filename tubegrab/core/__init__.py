from .errors import InvalidURLError, NotReadyError, TubegrabError, UpstreamFetchError
from .state import ExtractorState, RuntimeState, state

__all__ = [
    "ExtractorState",
    "InvalidURLError",
    "NotReadyError",
    "RuntimeState",
    "TubegrabError",
    "UpstreamFetchError",
    "state",
]
