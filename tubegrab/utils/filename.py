import re

MAX_FILENAME_LENGTH = 100

# Emoticons, symbols & pictographs, transport, flags, misc symbols, dingbats, supplemental symbols
_PICTOGRAPHS = re.compile(
    '['
    '\U0001F600-\U0001F64F'
    '\U0001F300-\U0001F5FF'
    '\U0001F680-\U0001F6FF'
    '\U0001F1E0-\U0001F1FF'
    '\u2600-\u26FF'
    '\u2700-\u27BF'
    '\U0001F900-\U0001F9FF'
    ']'
)
_ILLEGAL = re.compile(r'[<>:"/\\|?*]')
_WHITESPACE = re.compile(r'\s+')
_NON_ASCII = re.compile(r'[^\x00-\x7F]')
_HYPHENS = re.compile(r'-+')


def sanitize_filename(name: str, max_length: int = MAX_FILENAME_LENGTH) -> str:
    """Reduce a video title to a hyphen-joined ASCII token safe for Content-Disposition.

    May return an empty string; callers supply their own fallback.
    """
    name = _PICTOGRAPHS.sub('', name)
    name = _ILLEGAL.sub('', name)
    name = _WHITESPACE.sub('-', name)
    name = _NON_ASCII.sub('', name)
    name = _HYPHENS.sub('-', name)
    return name[:max_length].strip().strip('-')
