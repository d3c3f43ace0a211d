from __future__ import annotations
import ipyleaflet
from ipywidgets import Layout

from fleetportal.config import CFG


def osm_layer() -> ipyleaflet.TileLayer:
    return ipyleaflet.TileLayer(
        url=CFG.tiles_url,
        attribution=CFG.tiles_attribution,
        name="OpenStreetMap", base=True, max_zoom=CFG.tiles_max_zoom,
    )


def create_base_map(center: tuple[float, float], zoom: int, width: str, height: str) -> ipyleaflet.Map:
    return ipyleaflet.Map(
        basemap=osm_layer(),
        center=list(center), zoom=zoom, scroll_wheel_zoom=True,
        layout=Layout(height=height, width=width),
    )


def ensure_controls(m: ipyleaflet.Map):
    if not any(isinstance(c, ipyleaflet.ScaleControl) for c in m.controls):
        m.add(ipyleaflet.ScaleControl(position="bottomleft"))
