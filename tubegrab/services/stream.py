import asyncio
from collections import deque
from contextlib import suppress
from typing import AsyncIterator, Awaitable, Callable, Tuple
from fastapi import Request
from tubegrab.config.settings import config
from tubegrab.core.errors import UpstreamFetchError
from tubegrab.core.logging import log_info, log_error, log_warning
from tubegrab.services.info import VideoInfoService
from tubegrab.services.ytdlp import YTDLPCommandBuilder, SubprocessExecutor
from tubegrab.utils.filename import sanitize_filename
from tubegrab.i18n import i18n

FALLBACK_FILENAME = "video"
FILE_EXTENSION = "mp4"
MEDIA_TYPE = "video/mp4"
STDERR_READ_SIZE = 4096


class StderrCollector:
    """Drain a process' stderr, keeping only the last lines for diagnostics"""

    def __init__(self, stream: asyncio.StreamReader, max_lines: int):
        self.lines = deque(maxlen=max_lines)
        self._task = asyncio.create_task(self._drain(stream))

    async def _drain(self, stream: asyncio.StreamReader) -> None:
        pending = b""
        while True:
            data = await stream.read(STDERR_READ_SIZE)
            if not data:
                break
            pending += data
            *complete, pending = pending.split(b"\n")
            for line in complete:
                self._keep(line)
        self._keep(pending)

    def _keep(self, line: bytes) -> None:
        decoded = line.decode(errors="replace").strip()
        if decoded:
            self.lines.append(decoded)

    async def finish(self) -> None:
        """Let the drain reach EOF; the process must already have exited"""
        try:
            await asyncio.wait_for(asyncio.shield(self._task), timeout=1.0)
        except asyncio.TimeoutError:
            self._task.cancel()
            with suppress(asyncio.CancelledError):
                await self._task

    def summary(self) -> str:
        return "\n".join(self.lines)


class StreamService:
    """Relay yt-dlp's stdout to the HTTP client"""

    @staticmethod
    def build_filename(title: str) -> str:
        return f"{sanitize_filename(title) or FALLBACK_FILENAME}.{FILE_EXTENSION}"

    @staticmethod
    def build_headers(filename: str) -> dict:
        return {
            'Content-Disposition': f'attachment; filename="{filename}"',
            'X-Content-Type-Options': 'nosniff',
            'Cache-Control': 'no-cache',
        }

    @staticmethod
    async def stream(
        url: str, format_id: str, request: Request
    ) -> Tuple[AsyncIterator[bytes], dict, Callable[[], Awaitable[None]]]:
        """
        Start the download and return (generator, headers, cleanup).

        The first chunk is read here so a yt-dlp failure that produces no
        output can still become an error response. Once the generator runs,
        failures are only logged and the body ends early.
        cleanup must run once the response is over: if the client left
        before the body was iterated, it is the only thing that kills yt-dlp.
        """
        info = await VideoInfoService.probe(url)
        filename = StreamService.build_filename(info.title)
        headers = StreamService.build_headers(filename)
        log_info(request, i18n.get("log.filename", filename=filename))

        cmd = YTDLPCommandBuilder.build_stream_command(url, format_id)
        try:
            process = await SubprocessExecutor.spawn(cmd)
        except OSError as e:
            raise UpstreamFetchError(str(e))

        stderr = StderrCollector(process.stderr, config.download.stderr_max_lines)
        chunk_size = config.download.chunk_size

        try:
            first_chunk = await process.stdout.read(chunk_size)
        except Exception as e:
            await StreamService._terminate(process)
            await stderr.finish()
            raise UpstreamFetchError(str(e))
        except asyncio.CancelledError:
            await StreamService._terminate(process)
            await stderr.finish()
            raise

        if not first_chunk:
            returncode = await process.wait()
            await stderr.finish()
            if returncode != 0:
                raise UpstreamFetchError(stderr.summary() or f"yt-dlp exited with code {returncode}")

        async def generate():
            """Stream generator"""
            sent = 0
            completed = False
            try:
                chunk = first_chunk
                while chunk:
                    yield chunk
                    sent += len(chunk)
                    chunk = await process.stdout.read(chunk_size)
                completed = True
            except (asyncio.CancelledError, GeneratorExit):
                log_warning(request, i18n.get("log.client_disconnected", bytes=sent))
                raise
            except Exception as e:
                log_error(request, i18n.get("log.stream_error", bytes=sent, reason=str(e)))
            finally:
                if not completed:
                    await StreamService._terminate(process)
                returncode = await process.wait()
                await stderr.finish()
                if completed:
                    if returncode != 0:
                        reason = stderr.summary() or f"yt-dlp exited with code {returncode}"
                        log_error(request, i18n.get("log.stream_error", bytes=sent, reason=reason))
                    else:
                        log_info(request, i18n.get("log.stream_finished", bytes=sent))

        async def cleanup():
            if process.returncode is None:
                log_warning(request, i18n.get("log.response_abandoned"))
                await StreamService._terminate(process)
            await stderr.finish()

        return generate(), headers, cleanup

    @staticmethod
    async def _terminate(process: asyncio.subprocess.Process) -> None:
        if process.returncode is None:
            with suppress(ProcessLookupError):
                process.kill()
        await process.wait()
