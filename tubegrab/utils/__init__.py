from .filename import sanitize_filename
from .formatting import format_bytes, format_duration, round_half_up

__all__ = ["format_bytes", "format_duration", "round_half_up", "sanitize_filename"]
