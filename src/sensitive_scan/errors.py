"""Exceptions raised at configuration time.

Nothing here escapes from ``detect()``: rule faults during a scan are
recovered inside the detector.
"""

from __future__ import annotations


class SensitiveScanError(Exception):
    """Base class for sensitive-scan errors."""


class RegistryError(SensitiveScanError):
    """A detection registry is malformed (empty or duplicate type id)."""


class ConfigError(SensitiveScanError):
    """A configuration value is out of range or of the wrong type."""
