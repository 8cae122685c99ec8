"""
Atomic scene writer.

Overview
- write_scene(): serialize a Scene to canonical JSON and persist it with tmp → os.replace.

Notes
- Atomicity via os.replace holds only when tmp and final share a filesystem, so the tmp file
  is created next to the destination.
- Parent directories are created on demand.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from scenekit.core.scene import Scene
from scenekit.core.serde import scene_to_json

from .errors import IoWriteError

__all__ = [
    "write_text_atomic",
    "write_scene",
]

logger = logging.getLogger(__name__)


def write_text_atomic(path: str | os.PathLike[str], text: str) -> Path:
    """
    Write UTF-8 text to ``path`` via a sibling tmp file and an atomic rename.

    Raises:
        IoWriteError: If the tmp write or the rename fails (the tmp file is removed).
    """
    final = Path(path)
    tmp = final.with_name(final.name + ".tmp")
    try:
        final.parent.mkdir(parents=True, exist_ok=True)
        with tmp.open("wb") as fh:
            fh.write(text.encode("utf-8"))
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp, final)
    except OSError as exc:
        if tmp.exists():
            tmp.unlink()
        raise IoWriteError(f"failed to write {final}: {exc}") from exc
    return final


def write_scene(scene: Scene, path: str | os.PathLike[str], precision: int | None = None) -> Path:
    """
    Persist a scene as canonical JSON.

    Args:
        scene (Scene): Scene to write.
        path: Destination file.
        precision (int | None): Decimal places kept for floats; None keeps full precision.

    Returns:
        Path: The final path written.

    Raises:
        IoWriteError: If the write fails.
    """
    out = write_text_atomic(path, scene_to_json(scene, precision=precision))
    logger.info("scene written: %s (%d primitive(s))", out, len(scene.primitives))
    return out
