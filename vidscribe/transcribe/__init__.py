"""
vidscribe.transcribe - Video to WebVTT transcription pipeline.

Stages: download the source video, extract 64kbps mono 16kHz MP3 audio
with FFmpeg, check the size, and upload to the Whisper API. Temporary
files are removed on every exit path.
"""

from __future__ import annotations

from vidscribe.transcribe.pipeline import (
    PipelineStage,
    Transcriber,
    transcribe_video,
    transcribe_video_sync,
)

__all__ = [
    "PipelineStage",
    "Transcriber",
    "transcribe_video",
    "transcribe_video_sync",
]
