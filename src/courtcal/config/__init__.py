"""Configuration management for courtcal."""

from __future__ import annotations

from courtcal.config.loader import load_config
from courtcal.config.models import (
    ConflictScanConfig,
    CourtCalConfig,
    FilterConfig,
    StdoutExporterConfig,
)
from courtcal.config.serializer import generate_config_toml

__all__ = [
    "CourtCalConfig",
    "FilterConfig",
    "ConflictScanConfig",
    "StdoutExporterConfig",
    "load_config",
    "generate_config_toml",
]
