"""
Scene (de)serialization.

Scenes cross process boundaries as JSON: the CLI writes them and rendering shells in other
runtimes read them. Serialization goes through pydantic so the ``kind`` discriminator
round-trips every primitive back into its concrete class.

Notes:
    - ``precision`` rounds every float in the document (coordinates, radii, angles) to a fixed
      number of decimals; None keeps full precision.
    - Canonical key ordering comes from scenekit.core.hashing.json_dumps_canonical.
"""

from __future__ import annotations

import json
from typing import Any

from .hashing import json_dumps_canonical
from .scene import Scene

__all__ = [
    "json_loads",
    "scene_to_dict",
    "scene_to_json",
    "scene_from_json",
]


def json_loads(s: str) -> Any:
    """Deserialize a JSON string with the stdlib json module."""
    return json.loads(s)


def _round_floats(obj: Any, ndigits: int) -> Any:
    if isinstance(obj, float):
        return round(obj, ndigits)
    if isinstance(obj, dict):
        return {k: _round_floats(v, ndigits) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_round_floats(v, ndigits) for v in obj]
    return obj


def scene_to_dict(scene: Scene, *, precision: int | None = None) -> dict[str, Any]:
    """
    Dump a scene to plain JSON-compatible Python objects.

    Args:
        scene (Scene): Scene to dump.
        precision (int | None): Decimal places to keep for floats; None keeps all.

    Returns:
        dict[str, Any]: JSON-compatible mapping.
    """
    data = scene.model_dump(mode="json")
    if precision is not None:
        data = _round_floats(data, precision)
    return data


def scene_to_json(scene: Scene, *, precision: int | None = None) -> str:
    """Serialize a scene to canonical JSON."""
    return json_dumps_canonical(scene_to_dict(scene, precision=precision))


def scene_from_json(s: str) -> Scene:
    """
    Parse a scene JSON document back into a Scene.

    Raises:
        pydantic.ValidationError: If the document is not a valid scene.
    """
    return Scene.model_validate_json(s)
