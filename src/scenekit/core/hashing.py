"""
Canonical JSON and scene fingerprints.

One JSON policy for everything scenekit hashes or compares byte-for-byte: sorted keys,
compact separators, and raw (non-escaped) unicode. Digests are SHA-256 over the UTF-8
bytes of that text. This module does no IO.

Notes:
    - scene_fingerprint is how tests and the CLI check that identical inputs produce
      identical scenes.
    - Values must already be JSON-native; nothing here converts dates, enums, or models.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .scene import Scene

__all__ = [
    "json_dumps_canonical",
    "hash_mapping",
    "scene_fingerprint",
]


def json_dumps_canonical(obj: Any) -> str:
    """
    Dump ``obj`` as canonical JSON text.

    Examples:
        >>> json_dumps_canonical({"b": 1, "a": [1.5, "é"]})
        '{"a":[1.5,"é"],"b":1}'
    """
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _digest(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def hash_mapping(mapping: Mapping[str, Any]) -> str:
    """SHA-256 of a mapping's canonical JSON; insensitive to key order."""
    return _digest(json_dumps_canonical(dict(mapping)))


def scene_fingerprint(scene: Scene) -> str:
    """
    Fingerprint a scene.

    Args:
        scene (Scene): Scene to hash.

    Returns:
        str: 64-char hex digest of ``scene.model_dump(mode="json")`` in canonical form.

    Examples:
        >>> from scenekit.core.scene import Scene
        >>> a = Scene(chart="gauge", width=10, height=10)
        >>> scene_fingerprint(a) == scene_fingerprint(Scene(chart="gauge", width=10, height=10))
        True
    """
    return hash_mapping(scene.model_dump(mode="json"))
