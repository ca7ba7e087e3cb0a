"""
vidscribe.config - YAML config loading, environment overrides, validation.

Handles loading vidscribe.yaml, overlaying secrets from the environment,
and validating all parameters.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from vidscribe.exceptions import ConfigError

MB = 1024 * 1024

WHISPER_API_URL = "https://api.openai.com/v1/audio/transcriptions"
RESEND_API_URL = "https://api.resend.com/emails"

DEFAULT_CONFIG_NAME = "vidscribe.yaml"


class EmailProviderName(str, Enum):
    """Supported transactional email providers."""

    SES = "ses"
    RESEND = "resend"


class TranscriptionConfig(BaseModel):
    """Settings for the video-to-VTT pipeline."""

    api_key: str | None = None
    api_url: str = WHISPER_API_URL
    model: str = "whisper-1"
    response_format: str = "vtt"
    ffmpeg_path: str = "ffmpeg"

    max_video_bytes: int = Field(default=500 * MB, gt=0)
    max_audio_bytes: int = Field(default=25 * MB, gt=0)

    download_timeout: float = Field(default=5 * 60, gt=0.0)
    extract_timeout: float = Field(default=5 * 60, gt=0.0)
    upload_timeout: float = Field(default=10 * 60, gt=0.0)

    @field_validator("response_format")
    @classmethod
    def validate_response_format(cls, v: str) -> str:
        valid = {"vtt", "srt"}
        if v not in valid:
            raise ValueError(f"response_format must be one of: {valid}")
        return v


class SesConfig(BaseModel):
    """AWS SES credentials and sender."""

    access_key_id: str | None = None
    secret_access_key: str | None = None
    region: str = "us-east-1"
    from_email: str | None = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.access_key_id and self.secret_access_key)


class ResendConfig(BaseModel):
    """Resend API settings."""

    api_key: str | None = None
    api_url: str = RESEND_API_URL


class EmailConfig(BaseModel):
    """Email routing configuration."""

    provider: EmailProviderName = EmailProviderName.SES
    hosted: bool = False
    marketing_from: str | None = None
    hosted_from: str | None = None
    from_domain: str | None = None

    ses: SesConfig = Field(default_factory=SesConfig)
    resend: ResendConfig = Field(default_factory=ResendConfig)


class VidscribeConfig(BaseModel):
    """Resolved configuration for vidscribe."""

    transcription: TranscriptionConfig = Field(default_factory=TranscriptionConfig)
    email: EmailConfig = Field(default_factory=EmailConfig)

    config_path: Path | None = None


# env var -> (section, *keys)
ENV_OVERRIDES: dict[str, tuple[str, ...]] = {
    "OPENAI_API_KEY": ("transcription", "api_key"),
    "FFMPEG_PATH": ("transcription", "ffmpeg_path"),
    "EMAIL_PROVIDER": ("email", "provider"),
    "VIDSCRIBE_HOSTED": ("email", "hosted"),
    "RESEND_FROM_DOMAIN": ("email", "from_domain"),
    "RESEND_API_KEY": ("email", "resend", "api_key"),
    "AWS_SES_ACCESS_KEY_ID": ("email", "ses", "access_key_id"),
    "AWS_SES_SECRET_ACCESS_KEY": ("email", "ses", "secret_access_key"),
    "AWS_SES_REGION": ("email", "ses", "region"),
    "AWS_SES_FROM_EMAIL": ("email", "ses", "from_email"),
}


def apply_env_overrides(raw: dict[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    """Overlay environment variables onto a raw config dict.

    Empty environment values are ignored so an unset secret never clobbers
    a value from the YAML file.
    """
    merged = dict(raw)
    for var, keys in ENV_OVERRIDES.items():
        value = env.get(var)
        if not value:
            continue
        node = merged
        for key in keys[:-1]:
            child = node.get(key)
            child = child.copy() if isinstance(child, dict) else {}
            node[key] = child
            node = child
        node[keys[-1]] = value
    return merged


def load_config(
    path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> VidscribeConfig:
    """Load and validate configuration.

    Args:
        path: YAML config file. When None, ./vidscribe.yaml is used if present.
        env: Environment mapping (defaults to os.environ)

    Returns:
        Validated VidscribeConfig

    Raises:
        FileNotFoundError: If an explicit path does not exist
        ConfigError: If the merged configuration is invalid
    """
    if env is None:
        env = os.environ

    raw_config: dict[str, Any] = {}
    config_file = path
    if config_file is None:
        candidate = Path.cwd() / DEFAULT_CONFIG_NAME
        config_file = candidate if candidate.exists() else None
    elif not config_file.exists():
        raise FileNotFoundError(f"No config file found at {config_file}")

    if config_file is not None:
        with open(config_file) as f:
            raw_config = yaml.safe_load(f) or {}
        if not isinstance(raw_config, dict):
            raise ConfigError(f"{config_file} must contain a mapping")

    merged = apply_env_overrides(raw_config, env)
    merged["config_path"] = config_file

    try:
        return VidscribeConfig(**merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def create_default_config() -> dict[str, Any]:
    """Create a default config dict without secrets."""
    config = VidscribeConfig()
    data = config.model_dump(mode="json", exclude={"config_path"})
    data["transcription"].pop("api_key", None)
    data["email"]["ses"].pop("access_key_id", None)
    data["email"]["ses"].pop("secret_access_key", None)
    data["email"]["resend"].pop("api_key", None)
    return data


def write_config(config: dict[str, Any], path: Path) -> None:
    """Write configuration to a YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
