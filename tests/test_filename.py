from tubegrab.services.stream import StreamService
from tubegrab.utils.filename import MAX_FILENAME_LENGTH, sanitize_filename


def test_emoji_slashes_and_spaces_collapse_to_hyphens():
    assert sanitize_filename("My 😀 Video / Part   1 🎉") == "My-Video-Part-1"


def test_illegal_characters_are_removed():
    assert sanitize_filename('a<b>c:d"e|f?g*h\\i') == "abcdefghi"


def test_non_ascii_is_stripped():
    assert sanitize_filename("Café déjà vu") == "Caf-dj-vu"


def test_no_leading_or_trailing_hyphens():
    assert sanitize_filename("  -- Title --  ") == "Title"


def test_length_is_capped():
    result = sanitize_filename("word " * 60)
    assert len(result) <= MAX_FILENAME_LENGTH
    assert not result.startswith("-") and not result.endswith("-")


def test_all_emoji_title_is_empty():
    assert sanitize_filename("😀🚀🔥") == ""


def test_relay_falls_back_to_video():
    assert StreamService.build_filename("😀🚀🔥") == "video.mp4"
    assert StreamService.build_filename("Lo-fi beats ☕") == "Lo-fi-beats.mp4"
