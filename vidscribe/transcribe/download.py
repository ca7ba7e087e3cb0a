"""
vidscribe.transcribe.download - Stream a remote video to disk.

The size ceiling is checked against the Content-Length header only. A
response without the header, or with a wrong one, is not capped here;
the post-extraction audio size check is the backstop.
"""

from __future__ import annotations

import logging
from pathlib import Path

import aiofiles
import httpx

from vidscribe.config import MB
from vidscribe.exceptions import DownloadError, VideoTooLargeError
from vidscribe.transcribe.tempfiles import cleanup

logger = logging.getLogger(__name__)

MAX_VIDEO_SIZE = 500 * MB
CHUNK_SIZE = 64 * 1024


def declared_length(response: httpx.Response) -> int | None:
    """Parse Content-Length, returning None when absent or malformed."""
    value = response.headers.get("content-length")
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        logger.debug("Ignoring malformed content-length: %r", value)
        return None


async def download(
    url: str,
    dest_path: Path,
    client: httpx.AsyncClient | None = None,
    max_bytes: int = MAX_VIDEO_SIZE,
) -> int:
    """Download a URL to a local file.

    Args:
        url: Remote video location
        dest_path: File to write
        client: Shared httpx client (a temporary one is created if None)
        max_bytes: Ceiling applied to the declared Content-Length

    Returns:
        Number of bytes written

    Raises:
        DownloadError: On a non-success status or transport failure
        VideoTooLargeError: If the declared size exceeds max_bytes
    """
    if client is None:
        async with httpx.AsyncClient(follow_redirects=True, timeout=None) as own_client:
            return await download(url, dest_path, own_client, max_bytes)

    try:
        async with client.stream("GET", url) as response:
            if not response.is_success:
                raise DownloadError(
                    f"Failed to download video: {response.status_code} {response.reason_phrase}"
                )

            size = declared_length(response)
            if size is not None and size > max_bytes:
                raise VideoTooLargeError(size, max_bytes)

            return await _write_body(response, dest_path)
    except httpx.HTTPError as e:
        raise DownloadError(f"Failed to download video: {e}") from e


async def _write_body(response: httpx.Response, dest_path: Path) -> int:
    written = 0
    try:
        async with aiofiles.open(dest_path, "wb") as f:
            async for chunk in response.aiter_bytes(CHUNK_SIZE):
                await f.write(chunk)
                written += len(chunk)
    except BaseException:
        cleanup(dest_path)
        raise
    logger.debug("Downloaded %d bytes to %s", written, dest_path)
    return written
