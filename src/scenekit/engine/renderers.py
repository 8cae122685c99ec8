"""
Chart renderers: validate, resolve options, and build a Scene.

Each renderer is bound to a drawing surface once (``initialize``) and then renders any
number of query results against it. Rendering is a pure function of (query, options,
surface); renderer objects hold nothing else and may be shared across threads.

Responsibilities
- Turn a ChartValidationError into a failed Scene carrying the user-facing message.
- Turn a loose option mapping into the typed options record of the chart kind.
- Dispatch to the chart's layout engine (arc, polar, grid).

Notes:
    - OptionsError/ColorFormatError propagate to the caller; only cardinality failures become
      failed scenes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from scenekit.core.errors import ChartValidationError
from scenekit.core.grammar import ChartKind, chart_kind_from_value
from scenekit.core.options import ChartOptions, GaugeOptions, HeatmapOptions, RadarOptions, parse_options
from scenekit.core.scene import Scene
from scenekit.core.schema import QueryResult

from .arc import build_gauge_scene
from .grid import build_heatmap_scene
from .polar import build_radar_scene
from .validate import ChartData, validate_query

__all__ = [
    "Surface",
    "ChartRenderer",
    "GaugeRenderer",
    "RadarRenderer",
    "HeatmapRenderer",
    "RENDERERS",
    "renderer_for",
    "render_scene",
]

logger = logging.getLogger(__name__)

Options = ChartOptions | Mapping[str, Any] | None


@dataclass(frozen=True)
class Surface:
    """
    Drawing surface size in px.

    Raises:
        ValueError: If either side is negative.
    """

    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"surface size must be non-negative (got {self.width}x{self.height})")


class ChartRenderer:
    """
    Base renderer: shared validate → options → layout flow.

    Subclasses set ``kind``, ``options_model``, and ``build``.

    Examples:
        >>> r = GaugeRenderer()
        >>> r.initialize(Surface(400, 300))
        >>> scene = r.render({"fields": {"dimensions": ["k"], "measures": ["v"]},
        ...                   "rows": [{"k": {"value": "x"}, "v": {"value": 75}}]})
        >>> scene.ok, scene.primitives[0].kind
        (True, 'arc')
    """

    kind: ClassVar[ChartKind]
    options_model: ClassVar[type]
    build: ClassVar[Callable[[ChartData, Any, float, float], Scene]]

    def __init__(self) -> None:
        self._surface: Surface | None = None

    @property
    def surface(self) -> Surface:
        if self._surface is None:
            raise RuntimeError(f"{type(self).__name__} is not initialized; call initialize(surface) first")
        return self._surface

    def initialize(self, surface: Surface) -> None:
        """Bind the renderer to a surface size."""
        self._surface = surface

    def resolve_options(self, options: Options = None) -> ChartOptions:
        if isinstance(options, self.options_model):
            return options
        if options is not None and not isinstance(options, Mapping):
            raise TypeError(
                f"{self.kind.value} options must be a mapping or {self.options_model.__name__} "
                f"(got {type(options).__name__})"
            )
        return parse_options(self.kind, options)

    def render(self, query: QueryResult | Mapping[str, Any], options: Options = None) -> Scene:
        """
        Render a query result to a scene.

        Args:
            query (QueryResult | Mapping[str, Any]): Query result or its mapping form.
            options (ChartOptions | Mapping[str, Any] | None): Typed or loose options.

        Returns:
            Scene: Primitives on success; ``error`` set (no primitives) on validation failure.

        Raises:
            RuntimeError: If the renderer has not been initialized.
            OptionsError: If the option bag cannot be coerced.
        """
        surface = self.surface
        resolved = self.resolve_options(options)
        try:
            data = validate_query(self.kind, query)
        except ChartValidationError as exc:
            return Scene.failed(self.kind, surface.width, surface.height, exc.message)
        scene = type(self).build(data, resolved, surface.width, surface.height)
        logger.debug("%s scene built: %d primitive(s)", self.kind.value, len(scene.primitives))
        return scene


class GaugeRenderer(ChartRenderer):
    kind = ChartKind.GAUGE
    options_model = GaugeOptions
    build = staticmethod(build_gauge_scene)


class RadarRenderer(ChartRenderer):
    kind = ChartKind.RADAR
    options_model = RadarOptions
    build = staticmethod(build_radar_scene)


class HeatmapRenderer(ChartRenderer):
    kind = ChartKind.HEATMAP
    options_model = HeatmapOptions
    build = staticmethod(build_heatmap_scene)


RENDERERS: dict[ChartKind, type[ChartRenderer]] = {
    ChartKind.GAUGE: GaugeRenderer,
    ChartKind.RADAR: RadarRenderer,
    ChartKind.HEATMAP: HeatmapRenderer,
}


def renderer_for(kind: ChartKind | str, surface: Surface | None = None) -> ChartRenderer:
    """Instantiate the renderer of a chart kind, optionally initialized on a surface."""
    renderer = RENDERERS[chart_kind_from_value(kind)]()
    if surface is not None:
        renderer.initialize(surface)
    return renderer


def render_scene(
    kind: ChartKind | str,
    query: QueryResult | Mapping[str, Any],
    options: Options = None,
    *,
    width: float,
    height: float,
) -> Scene:
    """One-shot convenience: build a renderer, initialize it, and render a query."""
    return renderer_for(kind, Surface(width, height)).render(query, options)
