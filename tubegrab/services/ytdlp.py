from typing import List, Optional, NamedTuple
import asyncio
from tubegrab.core.state import state


class CompletedProcess(NamedTuple):
    """Subprocess result"""
    returncode: int
    stdout: bytes
    stderr: bytes


class SubprocessExecutor:
    """Execute subprocess with consistent error handling"""

    @staticmethod
    async def run(
        cmd: List[str],
        timeout: Optional[float] = None
    ) -> CompletedProcess:
        """
        Run subprocess to completion and collect its output.
        The process is killed if the wait is interrupted.
        """
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            stdin=asyncio.subprocess.DEVNULL
        )

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(),
                timeout=timeout
            )

            return CompletedProcess(
                returncode=process.returncode,
                stdout=stdout,
                stderr=stderr
            )

        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise
        except BaseException:
            if process.returncode is None:
                process.kill()
                await process.wait()
            raise

    @staticmethod
    async def spawn(cmd: List[str]) -> asyncio.subprocess.Process:
        """Start a long-running process whose stdout is consumed incrementally"""
        return await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            stdin=asyncio.subprocess.DEVNULL
        )


class YTDLPCommandBuilder:
    """Build yt-dlp commands"""

    @staticmethod
    def binary() -> str:
        return state.ytdlp_binary or 'yt-dlp'

    @staticmethod
    def build_version_command(binary: str) -> List[str]:
        return [binary, '--version']

    @staticmethod
    def build_info_command(url: str) -> List[str]:
        """Build command for fetching video info"""
        return [
            YTDLPCommandBuilder.binary(),
            '--dump-json',
            '--no-playlist',
            '--no-warnings',
            url,
        ]

    @staticmethod
    def build_stream_command(url: str, format_id: str) -> List[str]:
        """Build command that writes the selected format to stdout"""
        return [
            YTDLPCommandBuilder.binary(),
            url,
            '-f', format_id,
            '-o', '-',
            '--no-playlist',
            # keep stdout clean: it carries the media bytes
            '--no-progress',
            '--quiet',
        ]
