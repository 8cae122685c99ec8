"""
Configuration for scenekit runtime behavior.

Defines EngineSettings, a frozen dataclass carrying the defaults the CLI and IO helpers use
when a caller does not pass them explicitly: surface size, coordinate rounding for written
scenes, and log level.

Precedence
- environment (SCENEKIT_*) > TOML > defaults

TOML locations (first hit wins when no explicit path is given)
1) ./scenekit.toml (either an [engine] table or top-level keys)
2) ./pyproject.toml under [tool.scenekit.engine]

Import DAG discipline
- Depends only on stdlib and scenekit.io.errors.
- Does not import the engine, viz, or CLI layers.

Notes
- Unparseable values are ignored (the previous layer's value stays); out-of-range values
  raise IoConfigError.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .errors import IoConfigError

__all__ = [
    "EngineSettings",
    "LOG_LEVELS",
]

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class EngineSettings:
    """
    Runtime settings for rendering and writing scenes.

    Attributes:
        width (float): Default surface width in px (> 0).
        height (float): Default surface height in px (> 0).
        coordinate_precision (int | None): Decimal places kept for floats in written scene
            JSON; None keeps full precision.
        log_level (str): Level name for the ``scenekit`` logger.

    Raises:
        IoConfigError: If a size is not positive, the precision is negative, or the log level
            is unknown.

    Examples:
        >>> EngineSettings(width=800, height=600)  # doctest: +ELLIPSIS
        EngineSettings(width=800, height=600, ...)
    """

    width: float = 600.0
    height: float = 400.0
    coordinate_precision: int | None = None
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise IoConfigError(f"surface size must be positive (got {self.width}x{self.height})")
        if self.coordinate_precision is not None and self.coordinate_precision < 0:
            raise IoConfigError(
                f"coordinate_precision must be >= 0 (got {self.coordinate_precision})"
            )
        if self.log_level not in LOG_LEVELS:
            raise IoConfigError(f"log_level must be one of {LOG_LEVELS} (got {self.log_level!r})")

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: EngineSettings, cfg: dict[str, Any] | None) -> EngineSettings:
        """Apply a loose config mapping onto EngineSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        for key in ("width", "height"):
            if key in cfg:
                try:
                    s = replace(s, **{key: float(cfg[key])})
                except (TypeError, ValueError):
                    logger.debug("ignoring unparseable %s=%r", key, cfg[key])

        if "coordinate_precision" in cfg:
            raw = cfg["coordinate_precision"]
            if raw is None or (isinstance(raw, str) and raw.strip().lower() in {"", "none", "full"}):
                s = replace(s, coordinate_precision=None)
            else:
                try:
                    s = replace(s, coordinate_precision=int(raw))
                except (TypeError, ValueError):
                    logger.debug("ignoring unparseable coordinate_precision=%r", raw)

        if "log_level" in cfg and isinstance(cfg["log_level"], str):
            s = replace(s, log_level=cfg["log_level"].strip().upper())

        return s

    @classmethod
    def from_env(cls, base: EngineSettings | None = None, prefix: str = "SCENEKIT_") -> EngineSettings:
        """
        Build EngineSettings from environment variables. Precedence is env > base > defaults.

        Recognized variables:
            - SCENEKIT_WIDTH
            - SCENEKIT_HEIGHT
            - SCENEKIT_COORDINATE_PRECISION (integer, or "none" for full precision)
            - SCENEKIT_LOG_LEVEL
        """
        s = base or cls()

        mapping: dict[str, Any] = {}
        for key in ("width", "height", "coordinate_precision", "log_level"):
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v

        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> EngineSettings:
        """
        Build EngineSettings from a TOML file.

        Search order when ``path`` is None:
            1) ./scenekit.toml (with either a top-level [engine] table or direct keys)
            2) ./pyproject.toml under [tool.scenekit.engine]

        Returns defaults if no file is present.

        Raises:
            IoConfigError: If an explicit ``path`` does not exist, or a candidate file is not
                valid TOML.
        """
        s = cls()

        cand: list[Path] = []
        if path is not None:
            p = Path(path)
            if not p.exists():
                raise IoConfigError(f"settings file not found: {p}")
            cand.append(p)
        else:
            cand.append(Path.cwd() / "scenekit.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            try:
                with p.open("rb") as fh:
                    data = tomllib.load(fh)
            except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
                raise IoConfigError(f"invalid TOML in {p}: {exc}") from exc
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("scenekit", {}).get("engine", {}) if isinstance(tool, dict) else None
            elif isinstance(data.get("engine"), dict):
                cfg = data["engine"]
            else:
                cfg = data
            if cfg:
                logger.debug("engine settings loaded from %s", p)
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> EngineSettings:
        """
        Load EngineSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults (scenekit.toml,
                pyproject.toml).

        Returns:
            EngineSettings
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s
