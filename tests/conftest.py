from __future__ import annotations

import pytest

from fleetportal.models import Position, Region, Vessel
from fleetportal.mount import build_marker_icon


@pytest.fixture
def alpha() -> Vessel:
    return Vessel(
        id="v1",
        position=Position(lat=27.0, lng=56.0),
        speed=12,
        heading=90,
        name="Alpha",
        type="cargo",
        owner_name="X",
    )


@pytest.fixture
def fleet(alpha: Vessel) -> tuple[Vessel, ...]:
    return (
        alpha,
        Vessel(id="v2", position=Position(27.12, 56.31), speed=0, heading=0, name="Bravo", type="tanker", owner_name="Y"),
        Vessel(id="v3", position=Position(26.95, 56.42), speed=8.5, heading=215, name="Charlie", type="fishing", owner_name="Z"),
    )


@pytest.fixture
def port_region() -> Region:
    return Region(
        id="r1",
        kind="port",
        ring=((56.1, 27.1), (56.2, 27.1), (56.2, 27.2), (56.1, 27.2)),
        name="Harbour",
    )


@pytest.fixture
def mixed_regions(port_region: Region) -> tuple[Region, ...]:
    square = ((56.3, 26.9), (56.4, 26.9), (56.4, 27.0), (56.3, 27.0))
    return (
        port_region,
        Region(id="r2", kind="restricted", ring=square, name="Exclusion", description="Keep out"),
        Region(id="r3", kind="general", ring=square, name="Anchorage"),
        Region(id="r4", kind="port", ring=square, name="Fishing Port"),
        Region(id="r5", kind="mooring", ring=square, name="Buoys"),
    )


@pytest.fixture
def icon():
    return build_marker_icon()


@pytest.fixture
def click():
    """Deliver a frontend click message to an ipyleaflet layer."""
    def _click(layer, lat: float = 0.0, lng: float = 0.0) -> None:
        layer._handle_mouse_events(None, {"type": "click", "coordinates": [lat, lng]}, None)
    return _click
