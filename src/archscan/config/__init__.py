"""Config module exports."""

from archscan.config.loader import ArchScanSettings, load_config
from archscan.config.models import (
    ArchScanConfig,
    LoggingConfig,
    MarkersConfig,
    OutputConfig,
    ScanConfig,
)

__all__ = [
    "load_config",
    "ArchScanConfig",
    "ArchScanSettings",
    "LoggingConfig",
    "MarkersConfig",
    "OutputConfig",
    "ScanConfig",
]
