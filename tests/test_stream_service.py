"""StreamService used directly, without the HTTP layer."""
from types import SimpleNamespace

import pytest

from tubegrab.core.errors import UpstreamFetchError
from tubegrab.services.stream import StderrCollector, StreamService
from tests.conftest import YOUTUBE_URL, FakeProcess, FakeStream, make_info

REQUEST = SimpleNamespace(state=SimpleNamespace(request_id="test"))


@pytest.mark.asyncio
async def test_client_disconnect_kills_ytdlp(ready, extractor):
    extractor.probe_returns(make_info())
    process = FakeProcess(stdout=[b"one", b"two", b"three"])
    extractor.process = process

    generator, _, _ = await StreamService.stream(YOUTUBE_URL, "18", REQUEST)
    assert await generator.__anext__() == b"one"
    await generator.aclose()

    assert process.killed
    assert process.returncode == -9


@pytest.mark.asyncio
async def test_cleanup_kills_ytdlp_when_body_is_never_read(ready, extractor):
    extractor.probe_returns(make_info())
    process = FakeProcess(stdout=[b"one", b"two"])
    extractor.process = process

    _, _, cleanup = await StreamService.stream(YOUTUBE_URL, "18", REQUEST)
    await cleanup()

    assert process.killed
    assert process.returncode == -9


@pytest.mark.asyncio
async def test_cleanup_after_full_body_leaves_process_alone(ready, extractor):
    extractor.probe_returns(make_info())
    process = FakeProcess(stdout=[b"one", b"two"])
    extractor.process = process

    generator, _, cleanup = await StreamService.stream(YOUTUBE_URL, "18", REQUEST)
    assert [chunk async for chunk in generator] == [b"one", b"two"]
    await cleanup()

    assert not process.killed
    assert process.returncode == 0


@pytest.mark.asyncio
async def test_headers_declare_attachment(ready, extractor):
    extractor.probe_returns(make_info(title="Lecture 1: Intro"))
    extractor.process = FakeProcess(stdout=[b"x"])

    generator, headers, _ = await StreamService.stream(YOUTUBE_URL, "18", REQUEST)
    chunks = [chunk async for chunk in generator]

    assert chunks == [b"x"]
    assert headers["Content-Disposition"] == 'attachment; filename="Lecture-1-Intro.mp4"'
    assert "Content-Length" not in headers


@pytest.mark.asyncio
async def test_empty_successful_output_is_an_empty_body(ready, extractor):
    extractor.probe_returns(make_info())
    extractor.process = FakeProcess(stdout=[], returncode=0)

    generator, _, _ = await StreamService.stream(YOUTUBE_URL, "18", REQUEST)

    assert [chunk async for chunk in generator] == []


@pytest.mark.asyncio
async def test_failure_before_output_raises(ready, extractor):
    extractor.probe_returns(make_info())
    extractor.process = FakeProcess(stdout=[], stderr=b"ERROR: unable to download\n", returncode=1)

    with pytest.raises(UpstreamFetchError, match="unable to download"):
        await StreamService.stream(YOUTUBE_URL, "18", REQUEST)


@pytest.mark.asyncio
async def test_read_error_before_output_raises_and_kills(ready, extractor):
    extractor.probe_returns(make_info())
    process = FakeProcess(stdout=[OSError("bad pipe")])
    extractor.process = process

    with pytest.raises(UpstreamFetchError, match="bad pipe"):
        await StreamService.stream(YOUTUBE_URL, "18", REQUEST)
    assert process.killed


@pytest.mark.asyncio
async def test_stderr_collector_keeps_last_lines():
    stream = FakeStream([b"line 1\nline", b" 2\nline 3\n", b"line 4"])
    collector = StderrCollector(stream, max_lines=2)

    await collector.finish()

    assert collector.summary() == "line 3\nline 4"
