"""
vidscribe.utils - Shared utility functions.

Contains common functions used across multiple modules to avoid duplication.
"""

from __future__ import annotations

from pathlib import Path


def format_megabytes(size: int, precision: int = 2) -> str:
    """Format a byte count as megabytes, e.g. ``"2.00MB"``."""
    return f"{size / 1024 / 1024:.{precision}f}MB"


def format_size(path: Path) -> str:
    """Format file size in human-readable format."""
    if not path.exists():
        return "-"
    size = path.stat().st_size
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"
