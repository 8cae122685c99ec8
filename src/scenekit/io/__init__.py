"""
scenekit.io: file IO for query results, option bags, settings, and scenes.

## Responsibilities
- Load engine runtime settings with precedence env > TOML > defaults (EngineSettings).
- Read query results from JSON, CSV, or Parquet (Polars) and option bags from TOML/JSON.
- Write scenes as canonical JSON with an atomic tmp → os.replace rename.

## Public API
- EngineSettings: runtime defaults (surface size, coordinate precision, log level).
- read_query / read_options: inputs.
- write_scene: output.
- IoError and subclasses: IO-layer failures.

## Import DAG discipline
- Depends on stdlib, polars, and scenekit.core.*.
- MUST NOT import scenekit.engine, scenekit.viz, or the CLI.

## Examples
```python
from scenekit.io import EngineSettings, read_query, write_scene
settings = EngineSettings.load()  # doctest: +SKIP
query = read_query("kpi.csv", dimensions="kpi", measures="pct")  # doctest: +SKIP
write_scene(scene, "out/kpi.json", precision=settings.coordinate_precision)  # doctest: +SKIP
```
"""

from __future__ import annotations

from .config import EngineSettings
from .errors import IoConfigError, IoError, IoReadError, IoWriteError
from .read import frame_to_query, read_options, read_query, read_table
from .write import write_scene, write_text_atomic

__all__ = [
    "EngineSettings",
    "read_query",
    "read_options",
    "read_table",
    "frame_to_query",
    "write_scene",
    "write_text_atomic",
    "IoError",
    "IoConfigError",
    "IoReadError",
    "IoWriteError",
]
