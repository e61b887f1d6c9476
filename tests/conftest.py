"""Shared fixtures for the tubegrab test suite.

* No network access and no real yt-dlp: subprocess calls are replaced at
  the ``SubprocessExecutor`` boundary.
* The runtime state is reset after every test.
"""
import json
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from tubegrab.core.state import state
from tubegrab.main import app
from tubegrab.services.ytdlp import CompletedProcess, SubprocessExecutor

YOUTUBE_URL = "https://www.youtube.com/watch?v=abc123"


class FakeStream:
    """Stand-in for ``asyncio.StreamReader``: returns queued chunks, raises queued errors"""

    def __init__(self, items: Optional[List[Any]] = None):
        self.items = list(items or [])

    async def read(self, n: int = -1) -> bytes:
        if not self.items:
            return b""
        item = self.items.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


class FakeProcess:
    """Stand-in for ``asyncio.subprocess.Process``"""

    def __init__(self, stdout: Optional[List[Any]] = None, stderr: bytes = b"", returncode: int = 0):
        self.stdout = FakeStream(stdout)
        self.stderr = FakeStream([stderr] if stderr else [])
        self.returncode: Optional[int] = None
        self.killed = False
        self._exit_code = returncode

    def kill(self) -> None:
        self.killed = True

    async def wait(self) -> int:
        if self.returncode is None:
            self.returncode = -9 if self.killed else self._exit_code
        return self.returncode


class ExtractorStub:
    """Records yt-dlp invocations and answers them with canned results"""

    def __init__(self):
        self.run_calls: List[List[str]] = []
        self.spawn_calls: List[List[str]] = []
        self.run_results: List[Any] = []
        self.process: Any = FakeProcess()

    def probe_returns(self, info: Dict[str, Any]) -> None:
        self.run_results.append(CompletedProcess(0, json.dumps(info).encode(), b""))

    def probe_fails(self, stderr: str, returncode: int = 1) -> None:
        self.run_results.append(CompletedProcess(returncode, b"", stderr.encode()))

    async def run(self, cmd, timeout=None):
        self.run_calls.append(list(cmd))
        result = self.run_results.pop(0)
        if isinstance(result, BaseException):
            raise result
        return result

    async def spawn(self, cmd):
        self.spawn_calls.append(list(cmd))
        if isinstance(self.process, BaseException):
            raise self.process
        return self.process

    @property
    def calls(self) -> int:
        return len(self.run_calls) + len(self.spawn_calls)


def make_info(formats: Optional[List[Dict[str, Any]]] = None, **overrides: Any) -> Dict[str, Any]:
    """Minimal ``--dump-json`` document"""
    info = {
        "id": "abc123",
        "title": "Sample Video",
        "thumbnail": "https://i.ytimg.com/vi/abc123/hq720.jpg",
        "duration": 185,
        "webpage_url": YOUTUBE_URL,
        "formats": formats or [],
    }
    info.update(overrides)
    return info


def video_format(format_id: str, height: int, ext: str = "mp4", **extra: Any) -> Dict[str, Any]:
    fmt = {"format_id": format_id, "ext": ext, "height": height, "vcodec": "avc1.64001F", "acodec": "mp4a.40.2"}
    fmt.update(extra)
    return fmt


def audio_format(format_id: str, abr: Optional[float], **extra: Any) -> Dict[str, Any]:
    fmt = {"format_id": format_id, "ext": "m4a", "vcodec": "none", "acodec": "mp4a.40.2", "abr": abr}
    fmt.update(extra)
    return fmt


@pytest.fixture(autouse=True)
def reset_state():
    state.reset()
    yield
    state.reset()


@pytest.fixture
def ready():
    state.mark_ready("/opt/yt-dlp", "2024.08.06")
    return state


@pytest.fixture
def extractor(monkeypatch) -> ExtractorStub:
    stub = ExtractorStub()
    monkeypatch.setattr(SubprocessExecutor, "run", staticmethod(stub.run))
    monkeypatch.setattr(SubprocessExecutor, "spawn", staticmethod(stub.spawn))
    return stub


@pytest_asyncio.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
