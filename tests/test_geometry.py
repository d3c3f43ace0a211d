from __future__ import annotations

import pytest

from fleetportal.config import CFG
from fleetportal.geometry import style_for, to_canvas_ring
from fleetportal.models import GENERAL, PORT, RESTRICTED


def test_to_canvas_ring_swaps_each_pair_in_order() -> None:
    ring = [(56.1, 27.1), (56.2, 27.1), (56.2, 27.2), (56.1, 27.2)]

    out = to_canvas_ring(ring)

    assert len(out) == len(ring)
    assert out == [(27.1, 56.1), (27.1, 56.2), (27.2, 56.2), (27.2, 56.1)]


def test_to_canvas_ring_twice_is_identity() -> None:
    ring = [(10.0, -5.0), (11.0, -5.0), (11.0, -4.0), (10.0, -5.0)]
    assert to_canvas_ring(to_canvas_ring(ring)) == ring


def test_to_canvas_ring_accepts_geojson_lists_and_drops_altitude() -> None:
    ring = [[56.1, 27.1, 3.0], [56.2, 27.1, 3.0], [56.2, 27.2, 0.0]]
    assert to_canvas_ring(ring) == [(27.1, 56.1), (27.1, 56.2), (27.2, 56.2)]


def test_to_canvas_ring_passes_malformed_rings_through() -> None:
    # fewer than three points and a one-value vertex: no error, no repair
    assert to_canvas_ring([(1.0, 2.0), (3.0,)]) == [(2.0, 1.0), (3.0,)]
    assert to_canvas_ring([]) == []


def test_to_canvas_ring_does_not_mutate_input() -> None:
    ring = [[56.1, 27.1], [56.2, 27.1], [56.2, 27.2]]
    snapshot = [list(p) for p in ring]
    to_canvas_ring(ring)
    assert ring == snapshot


@pytest.mark.parametrize(
    "kind, color",
    [("port", "#3b82f6"), ("restricted", "#ef4444"), ("general", "#10b981")],
)
def test_style_for_known_kinds(kind: str, color: str) -> None:
    style = style_for(kind)
    assert style.stroke_color == color
    assert style.fill_opacity == CFG.region_fill_opacity


@pytest.mark.parametrize("kind", ["mooring", "PORT", "", None, 42, ["port"]])
def test_style_for_unknown_kind_falls_back_to_general(kind) -> None:
    assert style_for(kind) == style_for("general")


def test_path_options_fill_with_stroke_color() -> None:
    opts = style_for("restricted").path_options()
    assert opts["color"] == opts["fill_color"] == "#ef4444"
    assert opts["fill_opacity"] == 0.2


def test_to_canvas_ring_passes_non_pair_vertices_through() -> None:
    ring = [(56.1, 27.1), None, 5, "56.2,27.2"]
    assert to_canvas_ring(ring) == [(27.1, 56.1), None, 5, "56.2,27.2"]


def test_palette_is_keyed_by_region_kinds() -> None:
    assert set(CFG.region_colors) == {PORT, RESTRICTED, GENERAL}
    assert CFG.region_default_kind == GENERAL
