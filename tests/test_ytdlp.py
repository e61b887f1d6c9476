import sys

import pytest

from tubegrab.core.state import state
from tubegrab.services.ytdlp import SubprocessExecutor, YTDLPCommandBuilder


def test_commands_use_system_name_until_resolved():
    assert YTDLPCommandBuilder.build_info_command("https://youtu.be/x")[0] == "yt-dlp"


def test_commands_use_resolved_binary(ready):
    cmd = YTDLPCommandBuilder.build_stream_command("https://youtu.be/x", "22")

    assert cmd[:6] == ["/opt/yt-dlp", "https://youtu.be/x", "-f", "22", "-o", "-"]
    assert "--quiet" in cmd and "--no-progress" in cmd


def test_info_command_dumps_single_video_json():
    cmd = YTDLPCommandBuilder.build_info_command("https://youtu.be/x")

    assert "--dump-json" in cmd
    assert "--no-playlist" in cmd
    assert cmd[-1] == "https://youtu.be/x"


@pytest.mark.asyncio
async def test_executor_reports_missing_executable():
    with pytest.raises(FileNotFoundError):
        await SubprocessExecutor.run(["tubegrab-test-no-such-binary", "--version"])


@pytest.mark.asyncio
async def test_executor_always_collects_stderr():
    cmd = [sys.executable, "-c", "import sys; sys.stdout.write('out'); sys.stderr.write('ERROR: boom'); sys.exit(2)"]

    result = await SubprocessExecutor.run(cmd, timeout=30)

    assert result.returncode == 2
    assert result.stdout == b"out"
    assert result.stderr == b"ERROR: boom"


def test_state_transitions():
    state.mark_ready("/bin/yt-dlp", "2024.01.01")
    assert state.ready
    state.mark_failed()
    assert not state.ready
    assert state.extractor.value == "failed"
