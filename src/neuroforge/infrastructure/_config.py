"""
Engine configuration.

NeuroForge keeps a single process-wide `EngineConfig`. Its only switch today
is anomaly detection: when enabled, every forward kernel and every backward
rule validates its output and raises `InvalidNumericError` as soon as a NaN
or infinity appears, instead of letting it propagate silently into later
operations.

Defaults are read once from the environment:

- ``NEUROFORGE_DETECT_ANOMALY``: ``1``, ``true``, ``yes`` or ``on`` enables
  anomaly detection (case-insensitive).

Usage
-----
    from neuroforge import detect_anomaly

    with detect_anomaly():
        loss = mse(model(x), y)
        loss.backward()
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Iterator

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class EngineConfig:
    """
    Immutable snapshot of engine settings.

    Attributes
    ----------
    detect_anomaly : bool
        If True, operations fail fast on NaN/inf results.
    """

    detect_anomaly: bool = False

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """
        Build a configuration from environment variables.

        Returns
        -------
        EngineConfig
            Configuration with defaults overridden by the environment.
        """
        return cls(detect_anomaly=_env_flag("NEUROFORGE_DETECT_ANOMALY"))


_active: EngineConfig = EngineConfig.from_env()


def get_config() -> EngineConfig:
    """Return the active engine configuration."""
    return _active


def set_detect_anomaly(enabled: bool) -> None:
    """
    Enable or disable anomaly detection globally.

    Parameters
    ----------
    enabled : bool
        New anomaly-detection setting.
    """
    global _active
    _active = replace(_active, detect_anomaly=bool(enabled))


@contextmanager
def detect_anomaly(enabled: bool = True) -> Iterator[EngineConfig]:
    """
    Temporarily change anomaly detection, restoring the previous setting.

    Parameters
    ----------
    enabled : bool, optional
        Setting to apply inside the block. Defaults to True.

    Yields
    ------
    EngineConfig
        The configuration active inside the block.
    """
    global _active
    previous = _active
    _active = replace(previous, detect_anomaly=bool(enabled))
    try:
        yield _active
    finally:
        _active = previous
