# fleetportal/controls.py
from __future__ import annotations
from typing import Callable

import solara

from fleetportal.state import LayerState

# (flag, label) in panel order
LAYER_TOGGLES = (
    ("vessels", "Vessels"),
    ("regions", "Operational regions"),
    ("ports", "Ports"),
)


@solara.component
def LayersButton(state: LayerState, on_toggle: Callable[[str], None]):
    solara.Button(
        "Layers",
        outlined=not state.panel_expanded,
        on_click=lambda: on_toggle("panel"),
    )


@solara.component
def LayerControlPanel(state: LayerState, on_flag: Callable[[str, bool], None]):
    """
    Floating checkbox panel; one checkbox per layer flag.
    Renders nothing while the panel is collapsed.
    """
    if not state.panel_expanded:
        return

    values = {
        "vessels": state.vessels_visible,
        "regions": state.regions_visible,
        "ports": state.ports_visible,
    }

    with solara.Card(
        "Layer control",
        elevation=3,
        style={
            "position": "absolute",
            "left": "16px",
            "top": "80px",
            "zIndex": "1000",
            "width": "256px",
        },
    ):
        for flag, label in LAYER_TOGGLES:
            # default arg pins the flag for each checkbox
            solara.Checkbox(
                label=label,
                value=values[flag],
                on_value=lambda v, flag=flag: on_flag(flag, v),
            )
