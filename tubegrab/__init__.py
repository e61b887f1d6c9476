"""Paste a YouTube URL, pick a format, download it through yt-dlp."""

__version__ = "1.0.0"
