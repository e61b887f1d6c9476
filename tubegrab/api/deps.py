import functools
from fastapi import Request
from tubegrab.core.errors import NotReadyError
from tubegrab.core.state import state
from tubegrab.utils.locale import get_locale
from tubegrab.i18n import i18n


def translator(request: Request):
    """Return ``_`` bound to the caller's Accept-Language"""
    locale = get_locale(request.headers.get("accept-language"))
    return functools.partial(i18n.get, locale=locale)


async def require_ready(request: Request) -> None:
    """Refuse work until yt-dlp has reported a version"""
    if not state.ready:
        _ = translator(request)
        raise NotReadyError(_("error.not_ready"))
