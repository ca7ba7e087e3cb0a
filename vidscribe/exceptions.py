"""
vidscribe.exceptions - Custom exception classes.

All Vidscribe-specific exceptions inherit from VidscribeError. Every
transcription failure is terminal for the invocation that raised it.
"""

from __future__ import annotations

from vidscribe.utils import format_megabytes


class VidscribeError(Exception):
    """Base exception for all Vidscribe errors."""

    pass


class ConfigError(VidscribeError):
    """Configuration loading or validation error."""

    pass


class TranscriptionError(VidscribeError):
    """Base class for transcription pipeline failures.

    The pipeline records the stage it was in when the error escaped on the
    ``stage`` attribute.
    """

    stage: str | None = None


class MissingCredentialError(TranscriptionError):
    """No API key configured for the transcription provider."""

    pass


class DownloadError(TranscriptionError):
    """Source video could not be downloaded."""

    pass


class VideoTooLargeError(DownloadError):
    """Declared video size exceeds the download ceiling."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(
            f"Video too large: {format_megabytes(size, precision=0)} exceeds "
            f"{limit // (1024 * 1024)}MB limit. "
            "Consider using TRANSCRIPTION_PROVIDER=deepgram for large videos."
        )


class ExtractionError(TranscriptionError):
    """FFmpeg audio extraction error."""

    pass


class AudioTooLargeError(TranscriptionError):
    """Extracted audio exceeds the provider upload limit."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(
            f"Audio file size ({format_megabytes(size)}) exceeds Whisper's "
            f"{limit // (1024 * 1024)}MB limit. "
            "Consider using TRANSCRIPTION_PROVIDER=deepgram for longer videos."
        )


class UploadError(TranscriptionError):
    """Transcription provider rejected the upload."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class RateLimitedError(UploadError):
    """Transcription provider answered 429."""

    def __init__(self, retry_after: str | None = None):
        self.retry_after = retry_after
        hint = f"Retry after {retry_after} seconds. " if retry_after else ""
        super().__init__(
            f"Whisper API rate limit exceeded. {hint}"
            "Consider using TRANSCRIPTION_PROVIDER=deepgram for high-volume transcription.",
            status_code=429,
        )


class TranscriptionTimeoutError(TranscriptionError):
    """A pipeline stage did not finish before its deadline."""

    pass


class EmailError(VidscribeError):
    """Email provider misconfiguration or template error."""

    pass

