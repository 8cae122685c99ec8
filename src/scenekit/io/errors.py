"""
Custom exceptions for the scenekit.io module.

Purpose
- Provide IO-layer error types for reading inputs and writing scenes.
- Keep scenekit.core as the source of truth for chart validation and option errors (see
  scenekit.core.errors).

Boundaries
- scenekit.core.errors.ChartValidationError / OptionsError are raised by the engine and models.
- scenekit.io raises Io* errors for filesystem and format concerns:
  - IoConfigError: invalid settings file or unsupported settings value.
  - IoReadError: input file missing, unsupported extension, or unparseable content.
  - IoWriteError: atomic write path failed (tmp write/rename).

Notes
- These exceptions perform no IO and are stdlib-only.
"""

from __future__ import annotations

__all__ = [
    "IoError",
    "IoConfigError",
    "IoReadError",
    "IoWriteError",
]


class IoError(Exception):
    """
    Base class for IO-related errors in scenekit.io.

    Notes:
        Use this as a catch-all for IO-layer failures, distinct from scenekit.core errors.
    """


class IoConfigError(IoError):
    """
    Raised when engine settings are invalid.

    Examples:
        - Non-positive surface width from SCENEKIT_WIDTH
        - Unreadable scenekit.toml
    """


class IoReadError(IoError):
    """Raised when a query or options file cannot be read or parsed."""


class IoWriteError(IoError):
    """
    Raised when a scene write fails to complete atomically.

    Notes:
        The write path is tmp file → os.replace(tmp, final). Failures at any step surface as
        IoWriteError, with best-effort cleanup of the tmp file.
    """
