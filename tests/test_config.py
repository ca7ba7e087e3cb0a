"""Tests for vidscribe.config module."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from vidscribe.config import (
    MB,
    EmailProviderName,
    TranscriptionConfig,
    VidscribeConfig,
    apply_env_overrides,
    create_default_config,
    load_config,
    write_config,
)
from vidscribe.exceptions import ConfigError


class TestTranscriptionConfig:
    def test_defaults(self) -> None:
        config = TranscriptionConfig()
        assert config.api_key is None
        assert config.model == "whisper-1"
        assert config.response_format == "vtt"
        assert config.max_video_bytes == 500 * MB
        assert config.max_audio_bytes == 25 * MB
        assert config.download_timeout == 300
        assert config.extract_timeout == 300
        assert config.upload_timeout == 600

    def test_invalid_response_format_raises(self) -> None:
        with pytest.raises(ValueError):
            TranscriptionConfig(response_format="json")

    def test_non_positive_timeout_raises(self) -> None:
        with pytest.raises(ValueError):
            TranscriptionConfig(upload_timeout=0)


class TestVidscribeConfig:
    def test_default_email_provider_is_ses(self) -> None:
        config = VidscribeConfig()
        assert config.email.provider == EmailProviderName.SES
        assert config.email.ses.region == "us-east-1"
        assert config.email.ses.has_credentials is False

    def test_invalid_provider_raises(self) -> None:
        with pytest.raises(ValueError):
            VidscribeConfig(email={"provider": "sendgrid"})


class TestApplyEnvOverrides:
    def test_sets_nested_keys(self) -> None:
        merged = apply_env_overrides(
            {},
            {"OPENAI_API_KEY": "sk-env", "AWS_SES_REGION": "eu-west-1"},
        )
        assert merged["transcription"]["api_key"] == "sk-env"
        assert merged["email"]["ses"]["region"] == "eu-west-1"

    def test_keeps_file_values(self) -> None:
        raw = {"email": {"ses": {"region": "eu-west-1", "from_email": "a@example.com"}}}
        merged = apply_env_overrides(raw, {"AWS_SES_ACCESS_KEY_ID": "AKIA"})
        assert merged["email"]["ses"] == {
            "region": "eu-west-1",
            "from_email": "a@example.com",
            "access_key_id": "AKIA",
        }

    def test_empty_values_ignored(self) -> None:
        raw = {"transcription": {"api_key": "sk-file"}}
        merged = apply_env_overrides(raw, {"OPENAI_API_KEY": ""})
        assert merged["transcription"]["api_key"] == "sk-file"

    def test_does_not_mutate_input(self) -> None:
        raw = {"email": {"ses": {"region": "eu-west-1"}}}
        apply_env_overrides(raw, {"AWS_SES_REGION": "us-west-2"})
        assert raw["email"]["ses"]["region"] == "eu-west-1"


class TestLoadConfig:
    def test_load_from_file(self, config_file: Path) -> None:
        config = load_config(config_file, env={})
        assert config.transcription.download_timeout == 120
        assert config.email.provider == EmailProviderName.RESEND
        assert config.email.from_domain == "example.com"
        assert config.config_path == config_file

    def test_env_overrides_file(self, config_file: Path) -> None:
        env = {
            "OPENAI_API_KEY": "sk-env",
            "EMAIL_PROVIDER": "ses",
            "VIDSCRIBE_HOSTED": "true",
            "RESEND_API_KEY": "re_env",
        }
        config = load_config(config_file, env=env)
        assert config.transcription.api_key == "sk-env"
        assert config.email.provider == EmailProviderName.SES
        assert config.email.hosted is True
        assert config.email.resend.api_key == "re_env"

    def test_env_only(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        config = load_config(env={"OPENAI_API_KEY": "sk-env"})
        assert config.transcription.api_key == "sk-env"
        assert config.config_path is None

    def test_picks_up_config_in_cwd(
        self, config_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(config_file.parent)
        config = load_config(env={})
        assert config.transcription.download_timeout == 120

    def test_missing_explicit_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml", env={})

    def test_invalid_values_raise_config_error(self, tmp_path: Path) -> None:
        path = tmp_path / "vidscribe.yaml"
        path.write_text(yaml.dump({"email": {"provider": "carrier-pigeon"}}))
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path, env={})

    def test_non_mapping_raises_config_error(self, tmp_path: Path) -> None:
        path = tmp_path / "vidscribe.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError):
            load_config(path, env={})


class TestDefaultConfig:
    def test_excludes_secrets(self) -> None:
        config = create_default_config()
        assert "api_key" not in config["transcription"]
        assert "access_key_id" not in config["email"]["ses"]
        assert "api_key" not in config["email"]["resend"]
        assert config["email"]["provider"] == "ses"

    def test_written_config_loads(self, tmp_path: Path) -> None:
        path = tmp_path / "vidscribe.yaml"
        write_config(create_default_config(), path)
        config = load_config(path, env={})
        assert config.transcription.model == "whisper-1"
        assert config.email.provider == EmailProviderName.SES
