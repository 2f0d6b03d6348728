"""Configuration management for shiplog."""

from __future__ import annotations

from shiplog.config.loader import load_config
from shiplog.config.models import ExportConfig, HistoryConfig, ShiplogConfig

__all__ = [
    "ExportConfig",
    "HistoryConfig",
    "ShiplogConfig",
    "load_config",
]
