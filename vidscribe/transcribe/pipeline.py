"""
vidscribe.transcribe.pipeline - Orchestrates download, extraction and upload.

State machine:

    idle -> downloading -> extracting -> size_checking -> uploading -> done

with ``failed`` reachable from every non-terminal state. Both temp files
are removed exactly once before control returns to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from pathlib import Path

import httpx

from vidscribe.config import TranscriptionConfig
from vidscribe.exceptions import (
    AudioTooLargeError,
    ExtractionError,
    MissingCredentialError,
    TranscriptionError,
)
from vidscribe.transcribe.download import download
from vidscribe.transcribe.extract import extract_audio
from vidscribe.transcribe.tempfiles import TempArtifacts
from vidscribe.transcribe.timeout import with_timeout
from vidscribe.transcribe.whisper import upload
from vidscribe.utils import format_megabytes

logger = logging.getLogger(__name__)


class PipelineStage(str, Enum):
    IDLE = "idle"
    DOWNLOADING = "downloading"
    EXTRACTING = "extracting"
    SIZE_CHECKING = "size_checking"
    UPLOADING = "uploading"
    DONE = "done"
    FAILED = "failed"


class Transcriber:
    """Runs the video-to-VTT pipeline with a fixed configuration.

    One Transcriber can serve many concurrent invocations; per-invocation
    state lives in the coroutine, only the last stage reached is kept on
    the instance for reporting.
    """

    def __init__(
        self,
        config: TranscriptionConfig | None = None,
        client: httpx.AsyncClient | None = None,
        temp_dir: Path | None = None,
    ) -> None:
        self.config = config or TranscriptionConfig()
        self.client = client
        self.temp_dir = temp_dir
        self.stage = PipelineStage.IDLE
        self.failed_stage: PipelineStage | None = None

    def _enter(self, stage: PipelineStage) -> None:
        self.stage = stage
        logger.info("[whisper] %s", stage.value)

    async def transcribe(self, video_url: str) -> str:
        """Transcribe a remote video to WebVTT.

        Args:
            video_url: HTTP(S) location of the video

        Returns:
            Subtitle text returned by the provider

        Raises:
            MissingCredentialError: If no API key is configured
            TranscriptionError: Any stage failure, with ``stage`` set
        """
        self.stage = PipelineStage.IDLE
        self.failed_stage = None

        api_key = self.config.api_key
        if not api_key:
            self._fail(PipelineStage.IDLE)
            error = MissingCredentialError(
                "OPENAI_API_KEY is required for Whisper transcription"
            )
            error.stage = PipelineStage.IDLE.value
            raise error

        with TempArtifacts(self.temp_dir) as artifacts:
            try:
                return await self._run(video_url, api_key, artifacts)
            except TranscriptionError as e:
                self._fail(self.stage)
                if e.stage is None:
                    e.stage = self.failed_stage.value
                raise
            except Exception:
                self._fail(self.stage)
                raise

    async def _run(self, video_url: str, api_key: str, artifacts: TempArtifacts) -> str:
        config = self.config

        self._enter(PipelineStage.DOWNLOADING)
        await with_timeout(
            download(video_url, artifacts.video_path, self.client, config.max_video_bytes),
            config.download_timeout,
            "Video download timed out",
        )

        self._enter(PipelineStage.EXTRACTING)
        await with_timeout(
            extract_audio(artifacts.video_path, artifacts.audio_path, config.ffmpeg_path),
            config.extract_timeout,
            "FFmpeg audio extraction timed out",
        )

        self._enter(PipelineStage.SIZE_CHECKING)
        try:
            audio_size = artifacts.audio_path.stat().st_size
        except FileNotFoundError as e:
            raise ExtractionError("FFmpeg produced no audio output") from e
        logger.info("[whisper] Audio file size: %s", format_megabytes(audio_size))
        if audio_size > config.max_audio_bytes:
            raise AudioTooLargeError(audio_size, config.max_audio_bytes)

        self._enter(PipelineStage.UPLOADING)
        vtt = await with_timeout(
            upload(
                artifacts.audio_path,
                api_key,
                self.client,
                api_url=config.api_url,
                model=config.model,
                response_format=config.response_format,
            ),
            config.upload_timeout,
            "Whisper API request timed out",
        )

        self._enter(PipelineStage.DONE)
        return vtt

    def _fail(self, stage: PipelineStage) -> None:
        self.failed_stage = stage
        self.stage = PipelineStage.FAILED
        logger.warning("[whisper] Transcription failed during %s", stage.value)


async def transcribe_video(
    video_url: str,
    config: TranscriptionConfig | None = None,
    client: httpx.AsyncClient | None = None,
) -> str:
    """Transcribe a remote video to WebVTT using a one-off Transcriber."""
    return await Transcriber(config, client).transcribe(video_url)


def transcribe_video_sync(
    video_url: str,
    config: TranscriptionConfig | None = None,
) -> str:
    """Blocking wrapper around transcribe_video for CLI use."""
    return asyncio.run(transcribe_video(video_url, config))
