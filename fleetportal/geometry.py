# fleetportal/geometry.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterable, Sequence, Tuple

from fleetportal.config import CFG

LatLng = Tuple[float, float]


@dataclass(frozen=True)
class RegionStyle:
    stroke_color: str
    fill_opacity: float

    def path_options(self) -> dict:
        """Keyword arguments for an ipyleaflet Path (Polygon)."""
        return {
            "color": self.stroke_color,
            "fill_color": self.stroke_color,
            "fill_opacity": self.fill_opacity,
            "weight": CFG.region_weight,
        }


def to_canvas_ring(ring: Iterable[Sequence[Any]]) -> list[LatLng]:
    """
    Swap a stored (lng, lat) ring into Leaflet's (lat, lng) order.

    Order-preserving and non-validating: open rings, short rings and odd
    windings are returned as given. Extra ordinates (altitude) are dropped;
    vertices that are not coordinate pairs pass through unchanged.
    """
    out = []
    for pt in ring:
        if not isinstance(pt, Sequence) or isinstance(pt, str):
            out.append(pt)
            continue
        if len(pt) < 2:
            out.append(tuple(pt))
            continue
        out.append((pt[1], pt[0]))
    return out


def style_for(kind: Any) -> RegionStyle:
    """Stroke/fill for a region classification; unknown values get the general style."""
    colors = CFG.region_colors
    if not (isinstance(kind, str) and kind in colors):
        kind = CFG.region_default_kind
    return RegionStyle(stroke_color=colors[kind], fill_opacity=CFG.region_fill_opacity)

