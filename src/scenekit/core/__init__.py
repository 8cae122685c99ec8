"""
Core package aggregator for scenekit contracts (grammar, schemas, options, scene, hashing/serde).

## Contracts (single source of truth)
- Grammar: enums for chart kinds, validation failures, primitive kinds, text anchors.
- Schemas: query result and data point models consumed by the engine.
- Options: typed, defaulted, clamped chart option records.
- Scene: frozen primitive models and the Scene container painters consume.
- Hashing/Serde: canonical JSON utilities and scene fingerprints.
- Constants/Errors: layout constants and domain exceptions.

## Notes
- Zero‑IO policy: stdlib + pydantic only; no file/network IO.
- Naming policy: enum `.value` and field names are lower_snake.

## Downstream usage
- scenekit.engine: validates queries, resolves options, and emits Scene instances.
- scenekit.io: reads queries/options from disk and writes scene JSON via `serde`.
- scenekit.viz: maps Scene primitives to Altair layers.

## Examples
```python
from scenekit.core.options import parse_options
from scenekit.core.grammar import ChartKind
opts = parse_options(ChartKind.GAUGE, {"gauge_max": 200})
opts.gauge_max  # 200.0
```
"""
