# fleetportal/layers.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Sequence, Tuple

import ipyleaflet

from fleetportal.config import CFG
from fleetportal.geometry import style_for, to_canvas_ring
from fleetportal.models import Region, Vessel
from fleetportal.popups import region_popup, region_popup_html, vessel_popup, vessel_popup_html
from fleetportal.state import LayerState

logger = logging.getLogger(__name__)

VesselClick = Callable[[Vessel], None]


# -----------------------------
# Planning: which records become overlays
# -----------------------------
@dataclass(frozen=True)
class OverlayPlan:
    vessels: Tuple[Vessel, ...] = ()
    regions: Tuple[Region, ...] = ()


def visible_vessels(vessels: Iterable[Vessel], state: LayerState) -> Tuple[Vessel, ...]:
    if not state.vessels_visible:
        return ()
    return tuple(vessels)


def visible_regions(regions: Iterable[Region], state: LayerState) -> Tuple[Region, ...]:
    # step 1: the regions layer as a whole
    if not state.regions_visible:
        return ()
    # step 2: ports sub-filter, skips port regions outright
    if state.ports_visible:
        return tuple(regions)
    return tuple(r for r in regions if not r.is_port)


def plan_overlays(vessels: Iterable[Vessel], regions: Iterable[Region], state: LayerState) -> OverlayPlan:
    return OverlayPlan(
        vessels=visible_vessels(vessels, state),
        regions=visible_regions(regions, state),
    )


# -----------------------------
# Building single overlays
# -----------------------------
def _marker_options(vessel: Vessel) -> dict:
    opts = {
        "location": [vessel.position.lat, vessel.position.lng],
        "title": vessel.name,
    }
    if CFG.rotate_markers_by_heading:
        opts["rotation_angle"] = float(vessel.heading)
        opts["rotation_origin"] = "center bottom"
    return opts


def build_vessel_marker(vessel: Vessel, icon: Optional[ipyleaflet.Icon]) -> ipyleaflet.Marker:
    marker = ipyleaflet.Marker(
        icon=icon,
        draggable=False,
        popup=vessel_popup(vessel),
        name=vessel.id,
        **_marker_options(vessel),
    )
    return marker


def build_region_polygon(region: Region) -> ipyleaflet.Polygon:
    return ipyleaflet.Polygon(
        locations=to_canvas_ring(region.ring),
        popup=region_popup(region),
        name=region.id,
        **style_for(region.kind).path_options(),
    )


# -----------------------------
# Keyed reconciliation against LayerGroups
# -----------------------------
class OverlayLayers:
    """
    Two LayerGroups (vessels, regions) kept in sync with an OverlayPlan.

    Overlays are keyed by record id: a marker or polygon whose id survives
    between plans is updated in place, so the frontend diffs instead of
    tearing layers down. Click dispatch looks the vessel up at click time,
    so a marker always reports the record it currently shows.
    """

    def __init__(self, icon: Optional[ipyleaflet.Icon], on_vessel_click: Optional[Callable[[], Optional[VesselClick]]] = None):
        if icon is None:
            # markers must never fall back to the library's default icon lookup
            raise ValueError("OverlayLayers needs a registered marker icon")
        self.icon = icon
        # getter, so swapping the callback never touches the layers
        self._click_getter = on_vessel_click or (lambda: None)
        self.vessel_group = ipyleaflet.LayerGroup(name=CFG.vessel_layer_name)
        self.region_group = ipyleaflet.LayerGroup(name=CFG.region_layer_name)
        self.markers: Dict[str, ipyleaflet.Marker] = {}
        self.polygons: Dict[str, ipyleaflet.Polygon] = {}
        self._vessels: Dict[str, Vessel] = {}
        self._regions: Dict[str, Region] = {}

    @property
    def groups(self) -> Tuple[ipyleaflet.LayerGroup, ipyleaflet.LayerGroup]:
        # regions under vessels
        return self.region_group, self.vessel_group

    # ---- click ----
    def _dispatch_click(self, vessel_id: str) -> None:
        callback = self._click_getter()
        vessel = self._vessels.get(vessel_id)
        if callback is None or vessel is None:
            return
        logger.debug("vessel clicked: %s", vessel_id)
        callback(vessel)

    # ---- vessels ----
    def _new_marker(self, vessel: Vessel) -> ipyleaflet.Marker:
        marker = build_vessel_marker(vessel, self.icon)
        # capture the id, not the record
        marker.on_click(lambda vid=vessel.id, **_: self._dispatch_click(vid))
        return marker

    def _update_marker(self, marker: ipyleaflet.Marker, old: Vessel, new: Vessel) -> None:
        if old == new:
            return
        for key, val in _marker_options(new).items():
            if getattr(marker, key) != val:
                setattr(marker, key, val)
        marker.popup.value = vessel_popup_html(new)

    def _sync_vessels(self, vessels: Sequence[Vessel]) -> None:
        wanted: Dict[str, Vessel] = {}
        for v in vessels:
            if v.id in wanted:
                logger.warning("duplicate vessel id %r; keeping first", v.id)
                continue
            wanted[v.id] = v

        for vid in [k for k in self.markers if k not in wanted]:
            del self.markers[vid]
            del self._vessels[vid]

        for vid, vessel in wanted.items():
            marker = self.markers.get(vid)
            if marker is None:
                self.markers[vid] = self._new_marker(vessel)
            else:
                self._update_marker(marker, self._vessels[vid], vessel)
            self._vessels[vid] = vessel

        _set_group_layers(self.vessel_group, [self.markers[vid] for vid in wanted])

    # ---- regions ----
    def _update_polygon(self, polygon: ipyleaflet.Polygon, old: Region, new: Region) -> None:
        if old == new:
            return
        if old.ring != new.ring:
            polygon.locations = to_canvas_ring(new.ring)
        if old.kind != new.kind:
            for key, val in style_for(new.kind).path_options().items():
                setattr(polygon, key, val)
        polygon.popup.value = region_popup_html(new)

    def _sync_regions(self, regions: Sequence[Region]) -> None:
        wanted: Dict[str, Region] = {}
        for r in regions:
            if r.id in wanted:
                logger.warning("duplicate region id %r; keeping first", r.id)
                continue
            wanted[r.id] = r

        for rid in [k for k in self.polygons if k not in wanted]:
            del self.polygons[rid]
            del self._regions[rid]

        for rid, region in wanted.items():
            polygon = self.polygons.get(rid)
            if polygon is None:
                self.polygons[rid] = build_region_polygon(region)
            else:
                self._update_polygon(polygon, self._regions[rid], region)
            self._regions[rid] = region

        _set_group_layers(self.region_group, [self.polygons[rid] for rid in wanted])

    def apply(self, plan: OverlayPlan) -> "OverlayLayers":
        self._sync_regions(plan.regions)
        self._sync_vessels(plan.vessels)
        logger.debug("overlays: %d markers, %d polygons", len(self.markers), len(self.polygons))
        return self


def _set_group_layers(group: ipyleaflet.LayerGroup, layers: Sequence[ipyleaflet.Layer]) -> None:
    """Assign only when membership or order changed (each assignment is a frontend sync)."""
    new = tuple(layers)
    old = tuple(group.layers)
    if len(old) == len(new) and all(a is b for a, b in zip(old, new)):
        return
    group.layers = new


# -----------------------------
# Map-level helpers
# -----------------------------
def remove_prior_groups(m: ipyleaflet.Map, keep: Iterable[ipyleaflet.LayerGroup], names_to_prune: set[str]) -> None:
    """
    Remove older groups with certain names to avoid duplicates.
    """
    keep = list(keep)
    for layer in list(m.layers):
        if any(layer is k for k in keep):
            continue
        if isinstance(layer, ipyleaflet.LayerGroup) and getattr(layer, "name", "") in names_to_prune:
            m.remove(layer)


def ensure_groups(m: ipyleaflet.Map, groups: Iterable[ipyleaflet.LayerGroup]) -> None:
    for group in groups:
        if group not in m.layers:
            m.add(group)

