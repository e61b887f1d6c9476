from typing import Optional
from urllib.parse import parse_qs, urlparse
from tubegrab.config.settings import config

# the only query parameter worth logging; the rest are tracking noise
VIDEO_ID_PARAM = "v"


def get_locale(accept_language: Optional[str] = None) -> str:
    """Extract locale from Accept-Language header"""
    if not accept_language:
        return config.i18n.default_locale

    languages = []
    for lang in accept_language.split(","):
        parts = lang.strip().split(";")
        locale = parts[0].split("-")[0]
        languages.append(locale)

    for locale in languages:
        if locale in config.i18n.supported_locales:
            return locale

    return config.i18n.default_locale


def safe_url_for_log(url: str) -> str:
    """
    URL reduced to what identifies the video.
    ``watch?v=<id>&si=...`` keeps ``v``; ``youtu.be/<id>`` keeps its path.
    """
    try:
        parsed = urlparse(url)
        video_ids = parse_qs(parsed.query).get(VIDEO_ID_PARAM)
    except ValueError:
        return "invalid_url"

    query = f"{VIDEO_ID_PARAM}={video_ids[0]}" if video_ids else ""
    return parsed._replace(params="", query=query, fragment="").geturl()
