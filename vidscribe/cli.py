"""
vidscribe.cli - Typer CLI entry point.

Provides the transcribe, send-email and init-config commands.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from vidscribe import __version__
from vidscribe.config import (
    DEFAULT_CONFIG_NAME,
    VidscribeConfig,
    create_default_config,
    load_config,
    write_config,
)
from vidscribe.email import EmailMessage, create_email_provider, render_email, send_email
from vidscribe.exceptions import ConfigError, VidscribeError
from vidscribe.logging import configure_logging
from vidscribe.transcribe import transcribe_video_sync
from vidscribe.utils import format_size

app = typer.Typer(
    name="vidscribe",
    help="Transcribe videos to WebVTT with Whisper and send transactional email.",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"vidscribe {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Vidscribe - video transcription and email delivery helpers."""
    pass


def _load(config_path: Path | None) -> VidscribeConfig:
    try:
        return load_config(config_path)
    except (FileNotFoundError, ConfigError) as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


def parse_vars(items: list[str]) -> dict[str, str]:
    """Parse ``key=value`` pairs into a dict."""
    context: dict[str, str] = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got '{item}'")
        context[key] = value
    return context


@app.command("transcribe")
def transcribe(
    url: str = typer.Argument(..., help="URL of the video to transcribe"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the VTT to this file instead of stdout"
    ),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Download a video, extract audio and transcribe it with Whisper."""
    configure_logging(verbose)
    config = _load(config_path)

    try:
        with console.status("[dim]Transcribing...[/dim]"):
            vtt = transcribe_video_sync(url, config.transcription)
    except VidscribeError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(vtt, encoding="utf-8")
        console.print(f"[green]✓[/green] Transcript written to {output} ({format_size(output)})")
    else:
        typer.echo(vtt)


@app.command("send-email")
def send_email_command(
    recipient: str = typer.Argument(..., help="Recipient address"),
    subject: str = typer.Option(..., "--subject", "-s", help="Subject line"),
    template: str = typer.Option("transcript_ready", "--template", "-t", help="Template name"),
    var: list[str] = typer.Option([], "--var", help="Template variable as key=value"),
    marketing: bool = typer.Option(False, "--marketing", help="Send as marketing mail"),
    test: bool = typer.Option(False, "--test", help="Deliver to the provider's test sink"),
    scheduled_at: str | None = typer.Option(
        None, "--scheduled-at", help="ISO timestamp for scheduled delivery (Resend only)"
    ),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Render a template and send it through the configured provider."""
    configure_logging(verbose)
    config = _load(config_path)

    try:
        content = render_email(template, parse_vars(var))
        provider = create_email_provider(config.email)
    except VidscribeError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    try:
        message = EmailMessage(
            recipient=recipient,
            subject=subject,
            content=content,
            marketing=marketing,
            test=test,
            scheduled_at=scheduled_at,
        )
        result = send_email(provider, message)
    finally:
        provider.close()

    if not result.success:
        err_console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(1)
    if result.skipped:
        console.print("[yellow]Skipped: marketing mail is disabled for this deployment[/yellow]")
    else:
        console.print(f"[green]✓[/green] Sent via {provider.name} ({result.message_id})")


@app.command("init-config")
def init_config(
    path: Path = typer.Argument(Path(DEFAULT_CONFIG_NAME), help="Where to write the config"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
) -> None:
    """Write a default vidscribe.yaml (secrets come from the environment)."""
    if path.exists() and not force:
        err_console.print(f"[red]Error: '{path}' already exists[/red]")
        raise typer.Exit(1)

    write_config(create_default_config(), path)
    console.print(f"[green]✓[/green] Wrote {path}")
