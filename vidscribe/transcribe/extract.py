"""
vidscribe.transcribe.extract - FFmpeg audio extraction.

Strips the video stream and down-samples audio to 64kbps mono 16kHz MP3,
small enough for the Whisper upload limit on most recordings.
"""

from __future__ import annotations

import asyncio
import logging
import shlex
from pathlib import Path

from vidscribe.exceptions import ExtractionError

logger = logging.getLogger(__name__)

AUDIO_CODEC = "libmp3lame"
AUDIO_BITRATE = "64k"
AUDIO_CHANNELS = 1
AUDIO_SAMPLE_RATE = 16000

STDERR_TAIL_LINES = 20


def build_ffmpeg_command(
    video_path: Path,
    audio_path: Path,
    ffmpeg: str = "ffmpeg",
) -> list[str]:
    """Build the FFmpeg argument list for audio extraction."""
    return [
        ffmpeg,
        "-y",
        "-i",
        str(video_path),
        "-vn",
        "-acodec",
        AUDIO_CODEC,
        "-b:a",
        AUDIO_BITRATE,
        "-ac",
        str(AUDIO_CHANNELS),
        "-ar",
        str(AUDIO_SAMPLE_RATE),
        str(audio_path),
    ]


def _stderr_tail(stderr: bytes) -> str:
    lines = stderr.decode("utf-8", errors="replace").strip().splitlines()
    return "\n".join(lines[-STDERR_TAIL_LINES:])


async def extract_audio(
    video_path: Path,
    audio_path: Path,
    ffmpeg: str = "ffmpeg",
) -> Path:
    """Extract a compact audio track from a video file.

    Args:
        video_path: Source video file
        audio_path: Output MP3 path
        ffmpeg: FFmpeg executable

    Returns:
        audio_path

    Raises:
        ExtractionError: If FFmpeg is missing, exits with an error or writes
            no output
    """
    cmd = build_ffmpeg_command(video_path, audio_path, ffmpeg)
    logger.debug("ffmpeg command: %s", shlex.join(cmd))

    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise ExtractionError(f"FFmpeg error: {e}") from e

    try:
        _, stderr = await proc.communicate()
    except asyncio.CancelledError:
        if proc.returncode is None:
            proc.kill()
            await proc.wait()
        raise

    if proc.returncode != 0:
        logger.error("ffmpeg exited with %s", proc.returncode)
        raise ExtractionError(f"FFmpeg error: {_stderr_tail(stderr)}")

    if not Path(audio_path).exists():
        logger.error("ffmpeg exited cleanly but wrote no %s", audio_path)
        raise ExtractionError("FFmpeg produced no audio output")

    return audio_path
