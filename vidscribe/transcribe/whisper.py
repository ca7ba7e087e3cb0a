"""
vidscribe.transcribe.whisper - OpenAI Whisper API upload.
"""

from __future__ import annotations

import logging
from pathlib import Path

import aiofiles
import httpx

from vidscribe.config import WHISPER_API_URL
from vidscribe.exceptions import RateLimitedError, UploadError

logger = logging.getLogger(__name__)


async def upload(
    audio_path: Path,
    api_key: str,
    client: httpx.AsyncClient | None = None,
    api_url: str = WHISPER_API_URL,
    model: str = "whisper-1",
    response_format: str = "vtt",
) -> str:
    """Send an audio file to the Whisper API and return the subtitles.

    Args:
        audio_path: MP3 file to upload
        api_key: Bearer token for the API
        client: Shared httpx client (a temporary one is created if None)
        api_url: Transcription endpoint
        model: Model identifier
        response_format: Requested output format

    Returns:
        Response body verbatim (WebVTT text by default)

    Raises:
        RateLimitedError: On HTTP 429
        UploadError: On any other non-success status or transport failure
    """
    if client is None:
        async with httpx.AsyncClient(timeout=None) as own_client:
            return await upload(
                audio_path, api_key, own_client, api_url, model, response_format
            )

    async with aiofiles.open(audio_path, "rb") as f:
        audio_bytes = await f.read()
    files = {"file": ("audio.mp3", audio_bytes, "audio/mpeg")}
    data = {"model": model, "response_format": response_format}

    try:
        response = await client.post(
            api_url,
            headers={"Authorization": f"Bearer {api_key}"},
            files=files,
            data=data,
        )
    except httpx.HTTPError as e:
        raise UploadError(f"Whisper API request failed: {e}") from e

    if response.status_code == 429:
        retry_after = response.headers.get("retry-after")
        logger.warning("Whisper API rate limited (retry-after=%s)", retry_after)
        raise RateLimitedError(retry_after)

    if not response.is_success:
        raise UploadError(
            f"Whisper API error: {response.status_code} {response.text}",
            status_code=response.status_code,
        )

    return response.text
