"""Command-line interface for shiplog."""

from __future__ import annotations

from shiplog.cli.main import cli

__all__ = ["cli"]
