"""
Test configuration and shared fixtures.
"""

from __future__ import annotations

import stat
from pathlib import Path

import pytest
import yaml

from vidscribe.config import EmailConfig, ResendConfig, SesConfig, TranscriptionConfig

SAMPLE_VTT = """WEBVTT

00:00:00.000 --> 00:00:02.500
Hello and welcome.

00:00:02.500 --> 00:00:05.000
Today we look at the river.
"""


@pytest.fixture
def sample_vtt() -> str:
    """Return a two-cue WebVTT payload."""
    return SAMPLE_VTT


@pytest.fixture
def transcription_config() -> TranscriptionConfig:
    """Return a config with an API key and short timeouts."""
    return TranscriptionConfig(
        api_key="sk-test",
        download_timeout=5.0,
        extract_timeout=5.0,
        upload_timeout=5.0,
    )


@pytest.fixture
def email_config() -> EmailConfig:
    """Return a self-hosted email config with both providers configured."""
    return EmailConfig(
        provider="ses",
        hosted=False,
        marketing_from="News <news@example.com>",
        hosted_from="Auth <no-reply@example.com>",
        from_domain="example.com",
        ses=SesConfig(access_key_id="AKIATEST", secret_access_key="secret"),
        resend=ResendConfig(api_key="re_test"),
    )


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a vidscribe.yaml and return its path."""
    config = {
        "transcription": {"model": "whisper-1", "download_timeout": 120},
        "email": {"provider": "resend", "from_domain": "example.com"},
    }
    path = tmp_path / "vidscribe.yaml"
    with open(path, "w") as f:
        yaml.dump(config, f)
    return path


@pytest.fixture
def fake_ffmpeg(tmp_path: Path) -> Path:
    """Create an executable that mimics ffmpeg by writing its last argument."""
    script = tmp_path / "bin" / "ffmpeg"
    script.parent.mkdir()
    script.write_text(
        "#!/bin/sh\n"
        'for last; do :; done\n'
        'printf "ID3fakeaudio" > "$last"\n'
    )
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def failing_ffmpeg(tmp_path: Path) -> Path:
    """Create an executable that fails like ffmpeg on a corrupt input."""
    script = tmp_path / "bin" / "ffmpeg-broken"
    script.parent.mkdir(exist_ok=True)
    script.write_text(
        "#!/bin/sh\n"
        'echo "input.mp4: Invalid data found when processing input" >&2\n'
        "exit 1\n"
    )
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def silent_ffmpeg(tmp_path: Path) -> Path:
    """Create an executable that exits 0 without writing any output."""
    script = tmp_path / "bin" / "ffmpeg-silent"
    script.parent.mkdir(exist_ok=True)
    script.write_text("#!/bin/sh\nexit 0\n")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script
