"""Locate, provision and verify the yt-dlp binary.

Order of preference:

1. ``<binary_dir>/yt-dlp`` when it already exists,
2. otherwise the same path after downloading the latest release,
3. otherwise the ``yt-dlp`` found on ``PATH``.

The service only becomes ready once one of them answers ``--version``.
"""
import asyncio
import os
import shutil
import stat
import sys
from typing import Optional, Tuple

import aiofiles
import httpx
from rich.console import Console

from tubegrab.config.settings import ExtractorConfig, config
from tubegrab.core.state import RuntimeState, state
from tubegrab.services.ytdlp import YTDLPCommandBuilder, SubprocessExecutor

console = Console()

VERSION_TIMEOUT = 30.0
DOWNLOAD_CHUNK = 1024 * 1024


class ExtractorUnavailable(Exception):
    """A candidate binary could not be used"""


def binary_name() -> str:
    return "yt-dlp.exe" if sys.platform == "win32" else "yt-dlp"


def local_binary_path(extractor_config: ExtractorConfig) -> str:
    return os.path.abspath(os.path.join(extractor_config.binary_dir, binary_name()))


async def read_version(binary: str) -> str:
    """Return the version string reported by *binary*"""
    cmd = YTDLPCommandBuilder.build_version_command(binary)
    try:
        result = await SubprocessExecutor.run(cmd, timeout=VERSION_TIMEOUT)
    except (OSError, asyncio.TimeoutError) as e:
        raise ExtractorUnavailable(f"{binary}: {e}") from e

    version = result.stdout.decode(errors="replace").strip()
    if result.returncode != 0 or not version:
        reason = result.stderr.decode(errors="replace").strip() or f"exit code {result.returncode}"
        raise ExtractorUnavailable(f"{binary}: {reason}")
    return version


async def download_binary(
    destination: str,
    extractor_config: ExtractorConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> None:
    """Fetch the release asset into *destination* and mark it executable"""
    url = f"{extractor_config.download_url.rstrip('/')}/{binary_name()}"
    partial = f"{destination}.part"

    os.makedirs(os.path.dirname(destination), exist_ok=True)
    try:
        async with httpx.AsyncClient(
            follow_redirects=True,
            timeout=extractor_config.provision_timeout,
            transport=transport,
        ) as client:
            async with client.stream("GET", url) as response:
                response.raise_for_status()
                async with aiofiles.open(partial, "wb") as f:
                    async for chunk in response.aiter_bytes(DOWNLOAD_CHUNK):
                        await f.write(chunk)
    except (httpx.HTTPError, OSError) as e:
        if os.path.exists(partial):
            os.remove(partial)
        raise ExtractorUnavailable(f"download from {url} failed: {e}") from e

    os.replace(partial, destination)
    mode = os.stat(destination).st_mode
    os.chmod(destination, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


async def use_local_binary(extractor_config: ExtractorConfig) -> Tuple[str, str]:
    path = local_binary_path(extractor_config)

    if os.path.exists(path):
        console.print(f"[green]✓ Using existing yt-dlp binary at {path}[/green]")
    elif extractor_config.auto_provision:
        console.print("[cyan]↓ Downloading yt-dlp binary...[/cyan]")
        await download_binary(path, extractor_config)
        console.print(f"[green]✓ yt-dlp downloaded to {path}[/green]")
    else:
        raise ExtractorUnavailable(f"{path} does not exist and provisioning is disabled")

    return path, await read_version(path)


async def use_system_binary(extractor_config: ExtractorConfig) -> Tuple[str, str]:
    path: Optional[str] = shutil.which(extractor_config.system_binary)
    if not path:
        raise ExtractorUnavailable(f"{extractor_config.system_binary} not found on PATH")
    return path, await read_version(path)


async def initialize_extractor(
    runtime: RuntimeState = state,
    extractor_config: Optional[ExtractorConfig] = None,
) -> RuntimeState:
    """Resolve a working yt-dlp and publish it on *runtime*"""
    extractor_config = extractor_config or config.extractor
    console.print("[cyan]⟳ Setting up yt-dlp...[/cyan]")

    try:
        binary, version = await use_local_binary(extractor_config)
    except ExtractorUnavailable as e:
        console.print(f"[red]✗ Local yt-dlp unavailable: {e}[/red]")
        console.print("[yellow]⚠ Trying system yt-dlp...[/yellow]")
        try:
            binary, version = await use_system_binary(extractor_config)
        except ExtractorUnavailable as e:
            console.print(f"[red]✗ System yt-dlp unavailable: {e}[/red]")
            runtime.mark_failed()
            return runtime

    runtime.mark_ready(binary, version)
    console.print(f"[green]✓ yt-dlp version {version} ready[/green]")
    return runtime
