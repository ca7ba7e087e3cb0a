"""
vidscribe.transcribe.tempfiles - Per-invocation temporary artifacts.

Each invocation gets a unique id (timestamp plus random token) so that
concurrent invocations never share a file in the temp directory.
"""

from __future__ import annotations

import logging
import secrets
import string
import tempfile
import time
from pathlib import Path

logger = logging.getLogger(__name__)

EXTENSIONS = {
    "video": "mp4",
    "audio": "mp3",
}

_BASE36 = string.digits + string.ascii_lowercase


def _random_token(length: int = 11) -> str:
    return "".join(secrets.choice(_BASE36) for _ in range(length))


def new_temp_id() -> str:
    """Generate an invocation id like ``whisper-1718000000000-k3j9x0a2bqz``."""
    return f"whisper-{int(time.time() * 1000)}-{_random_token()}"


def make_temp_path(
    kind: str,
    temp_id: str | None = None,
    temp_dir: Path | None = None,
) -> Path:
    """Build an absolute temp path for a pipeline artifact.

    Args:
        kind: "video" or "audio"
        temp_id: Invocation id (a fresh one is generated if None)
        temp_dir: Directory to place the file in (system temp dir if None)

    Returns:
        Absolute path; the file is not created

    Raises:
        ValueError: If kind is unknown
    """
    if kind not in EXTENSIONS:
        raise ValueError(f"kind must be one of: {set(EXTENSIONS)}")
    if temp_id is None:
        temp_id = new_temp_id()
    base = Path(temp_dir) if temp_dir is not None else Path(tempfile.gettempdir())
    return (base / f"{temp_id}-{kind}.{EXTENSIONS[kind]}").resolve()


def cleanup(path: Path) -> None:
    """Remove a file, ignoring a missing file. Never raises."""
    try:
        Path(path).unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.error("Failed to cleanup %s: %s", path, e)


class TempArtifacts:
    """Video and audio temp paths owned by one pipeline invocation.

    Both files are removed exactly once when the context exits, whatever
    the outcome.
    """

    def __init__(self, temp_dir: Path | None = None, temp_id: str | None = None) -> None:
        self.temp_id = temp_id or new_temp_id()
        self.video_path = make_temp_path("video", self.temp_id, temp_dir)
        self.audio_path = make_temp_path("audio", self.temp_id, temp_dir)
        self._cleaned = False

    def cleanup(self) -> None:
        if self._cleaned:
            return
        self._cleaned = True
        cleanup(self.video_path)
        cleanup(self.audio_path)

    def __enter__(self) -> TempArtifacts:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()
