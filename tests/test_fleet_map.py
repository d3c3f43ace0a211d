from __future__ import annotations

from pathlib import Path

import ipyleaflet
import ipyvuetify as v
import ipywidgets as W
import solara
import solara.server.app  # noqa: F401  routes solara.display() into an Output widget

from fleetportal.config import CFG
from fleetportal.fleet_map import FleetMap, FleetMapFrame
from fleetportal.mount import MountState
from fleetportal.state import LayerState

ROOT = Path(__file__).resolve().parent.parent


def _map(rc) -> ipyleaflet.Map:
    # solara.display(m) renders the map through an Output widget
    out = rc.find(W.Output).widget
    model_id = out.outputs[0]["data"]["application/vnd.jupyter.widget-view+json"]["model_id"]
    m = W.Widget.widgets[model_id]
    assert isinstance(m, ipyleaflet.Map)
    return m


def _group(m: ipyleaflet.Map, name: str) -> ipyleaflet.LayerGroup:
    (group,) = [g for g in m.layers if isinstance(g, ipyleaflet.LayerGroup) and g.name == name]
    return group


def _counts(m: ipyleaflet.Map):
    return (
        len(_group(m, CFG.vessel_layer_name).layers),
        len(_group(m, CFG.region_layer_name).layers),
    )


def test_placeholder_until_canvas_is_ready(alpha, port_region, icon) -> None:
    el = FleetMapFrame([alpha], [port_region], MountState.NOT_READY, None)
    box, rc = solara.render(el, handle_error=False)

    rc.find(W.HTML, value=CFG.placeholder_text).assert_single()
    rc.find(W.Output).assert_empty()

    rc.render(FleetMapFrame([alpha], [port_region], MountState.READY, icon))

    rc.find(W.HTML, value=CFG.placeholder_text).assert_empty()
    assert _counts(_map(rc)) == (1, 1)


def test_all_layers_on_shows_marker_and_port_polygon(alpha, port_region) -> None:
    box, rc = solara.render(FleetMap([alpha], [port_region]), handle_error=False)

    m = _map(rc)
    (marker,) = _group(m, CFG.vessel_layer_name).layers
    (polygon,) = _group(m, CFG.region_layer_name).layers
    assert marker.location == [27.0, 56.0]
    assert polygon.color == CFG.region_colors["port"]
    assert [tuple(p) for p in polygon.locations] == [(27.1, 56.1), (27.1, 56.2), (27.2, 56.2), (27.2, 56.1)]


def test_ports_off_hides_the_port_polygon(alpha, port_region) -> None:
    start = LayerState(ports_visible=False)
    box, rc = solara.render(FleetMap([alpha], [port_region], initial_layers=start), handle_error=False)

    assert _counts(_map(rc)) == (1, 0)


def test_layer_panel_toggles_overlays(fleet, mixed_regions) -> None:
    box, rc = solara.render(FleetMap(fleet, mixed_regions), handle_error=False)
    m = _map(rc)
    assert _counts(m) == (3, 5)
    rc.find(v.Checkbox, label="Ports").assert_empty()

    rc.find(v.Btn, children=["Layers"]).widget.click()
    rc.find(v.Checkbox, label="Ports").widget.v_model = False
    assert _counts(m) == (3, 3)

    rc.find(v.Checkbox, label="Operational regions").widget.v_model = False
    assert _counts(m) == (3, 0)

    rc.find(v.Checkbox, label="Vessels").widget.v_model = False
    assert _counts(m) == (0, 0)

    rc.find(v.Btn, children=["Layers"]).widget.click()
    rc.find(v.Checkbox, label="Ports").assert_empty()
    # closing the panel leaves the flags alone
    assert _counts(m) == (0, 0)


def test_click_uses_latest_callback_without_rebuilding(fleet, click) -> None:
    first, second = [], []
    box, rc = solara.render(FleetMap(fleet, on_vessel_click=first.append), handle_error=False)
    m = _map(rc)
    markers = list(_group(m, CFG.vessel_layer_name).layers)

    rc.render(FleetMap(fleet, on_vessel_click=second.append))

    assert _map(rc) is m
    assert list(_group(m, CFG.vessel_layer_name).layers) == markers
    click(markers[0])
    assert first == []
    assert second == [fleet[0]]


def test_new_snapshot_reuses_markers_by_id(fleet) -> None:
    box, rc = solara.render(FleetMap(fleet), handle_error=False)
    m = _map(rc)
    before = {mk.name: mk for mk in _group(m, CFG.vessel_layer_name).layers}

    rc.render(FleetMap(fleet[1:]))

    after = {mk.name: mk for mk in _group(m, CFG.vessel_layer_name).layers}
    assert sorted(after) == ["v2", "v3"]
    assert all(after[k] is before[k] for k in after)


def test_page_renders_bundled_snapshot(monkeypatch) -> None:
    monkeypatch.chdir(ROOT)
    from fleetportal.app import Page

    box, rc = solara.render(Page(), handle_error=False)

    assert _counts(_map(rc)) == (4, 3)
