# fleetportal/fleet_map.py
from __future__ import annotations
from typing import Callable, Optional, Sequence, Tuple

import ipyleaflet
import solara

from fleetportal.basemap import create_base_map, ensure_controls
from fleetportal.config import CFG
from fleetportal.controls import LayerControlPanel, LayersButton
from fleetportal.layers import OverlayLayers, ensure_groups, plan_overlays, remove_prior_groups
from fleetportal.models import Region, Vessel
from fleetportal.mount import MapPlaceholder, MountState, use_canvas_mount
from fleetportal.state import LayerState, ReactiveRefs, use_layer_state


@solara.component
def LiveMap(
    vessels: Sequence[Vessel],
    regions: Sequence[Region],
    icon: ipyleaflet.Icon,
    center: Optional[Tuple[float, float]] = None,
    zoom: Optional[int] = None,
    on_vessel_click: Optional[Callable[[Vessel], None]] = None,
    initial_layers: Optional[LayerState] = None,
):
    vessels, regions = tuple(vessels), tuple(regions)
    layers, toggle, set_flag = use_layer_state(initial_layers)

    # latest click handler, read at click time; replacing it never re-syncs the map
    refs = ReactiveRefs(on_vessel_click)
    refs.on_vessel_click_ref.current = on_vessel_click

    # ---- Map (memoized; center/zoom are initial values only) ----
    m = solara.use_memo(
        lambda: create_base_map(center or CFG.map_center, zoom or CFG.map_zoom, CFG.map_width, CFG.map_height),
        [],
    )

    def _init_controls():
        ensure_controls(m)
    solara.use_effect(_init_controls, [])

    # ---- Overlays ----
    overlays = solara.use_memo(
        lambda: OverlayLayers(icon, on_vessel_click=lambda: refs.on_vessel_click_ref.current),
        [icon],
    )
    plan = solara.use_memo(lambda: plan_overlays(vessels, regions, layers), [vessels, regions, layers])

    def _sync_overlays():
        overlays.apply(plan)
        remove_prior_groups(m, keep=overlays.groups, names_to_prune={CFG.vessel_layer_name, CFG.region_layer_name})
        ensure_groups(m, overlays.groups)
    solara.use_effect(_sync_overlays, [overlays, plan])

    # ---- UI ----
    with solara.Div(style={"position": "relative"}):
        with solara.Card(style={"padding": "0"}):
            with solara.Row(justify="space-between", style={"alignItems": "center", "padding": "8px 12px"}):
                solara.Markdown(f"**{CFG.app_title}**")
                LayersButton(layers, toggle)
            solara.display(m)
        LayerControlPanel(layers, set_flag)


@solara.component
def FleetMapFrame(
    vessels: Sequence[Vessel],
    regions: Sequence[Region],
    mount_state: MountState,
    icon: Optional[ipyleaflet.Icon],
    center: Optional[Tuple[float, float]] = None,
    zoom: Optional[int] = None,
    on_vessel_click: Optional[Callable[[Vessel], None]] = None,
    initial_layers: Optional[LayerState] = None,
):
    """Placeholder until the canvas is mounted, then the live map."""
    if mount_state is not MountState.READY or icon is None:
        MapPlaceholder()
        return
    LiveMap(
        vessels, regions, icon,
        center=center, zoom=zoom,
        on_vessel_click=on_vessel_click,
        initial_layers=initial_layers,
    )


@solara.component
def FleetMap(
    vessels: Sequence[Vessel],
    regions: Sequence[Region] = (),
    center: Optional[Tuple[float, float]] = None,
    zoom: Optional[int] = None,
    on_vessel_click: Optional[Callable[[Vessel], None]] = None,
    initial_layers: Optional[LayerState] = None,
):
    """
    Live fleet map: vessel markers and region polygons with a layer panel.

    `vessels` and `regions` are treated as an immutable snapshot; pass a new
    collection to refresh. `on_vessel_click` receives the clicked Vessel.
    """
    mount_state, icon = use_canvas_mount()
    FleetMapFrame(
        vessels, regions, mount_state, icon,
        center=center, zoom=zoom,
        on_vessel_click=on_vessel_click,
        initial_layers=initial_layers,
    )
