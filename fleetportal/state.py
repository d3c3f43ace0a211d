# fleetportal/state.py
from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional, Tuple

import solara

from fleetportal.config import CFG

logger = logging.getLogger(__name__)

# flag name -> LayerState field
FLAGS = {
    "vessels": "vessels_visible",
    "regions": "regions_visible",
    "ports": "ports_visible",
    "panel": "panel_expanded",
}


@dataclass(frozen=True)
class LayerState:
    """
    Visibility flags for the map overlays plus the control panel toggle.

    The flags are stored independently. `ports_visible` only matters for
    port regions while `regions_visible` is on; that coupling is applied
    when overlays are planned, not here.
    """
    vessels_visible: bool = True
    regions_visible: bool = True
    ports_visible: bool = True
    panel_expanded: bool = False

    @classmethod
    def default(cls) -> "LayerState":
        return cls(
            vessels_visible=CFG.show_vessels,
            regions_visible=CFG.show_regions,
            ports_visible=CFG.show_ports,
            panel_expanded=CFG.layers_panel_open,
        )

    @staticmethod
    def _field(flag: str) -> str:
        try:
            return FLAGS[flag]
        except KeyError:
            raise ValueError(f"Unknown layer flag {flag!r}; expected one of {sorted(FLAGS)}") from None

    def toggle(self, flag: str) -> "LayerState":
        name = self._field(flag)
        return replace(self, **{name: not getattr(self, name)})

    def with_flag(self, flag: str, value: bool) -> "LayerState":
        return replace(self, **{self._field(flag): bool(value)})


class ReactiveRefs:
    """Holds refs shared between hooks of the live map."""
    def __init__(self, on_vessel_click=None):
        self.on_vessel_click_ref = solara.use_ref(on_vessel_click)


def use_layer_state(
    initial: Optional[LayerState] = None,
) -> Tuple[LayerState, Callable[[str], None], Callable[[str, bool], None]]:
    """
    Hook returning (state, toggle, set_flag).
    toggle("ports"), set_flag("vessels", False)
    """
    state, set_state = solara.use_state(initial or LayerState.default())

    def toggle(flag: str):
        nxt = state.toggle(flag)
        logger.debug("layer flag %s -> %s", flag, getattr(nxt, FLAGS[flag]))
        set_state(nxt)

    def set_flag(flag: str, value: bool):
        set_state(state.with_flag(flag, value))

    return state, toggle, set_flag
