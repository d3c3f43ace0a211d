# fleetportal/mount.py
from __future__ import annotations
import enum
import logging
from typing import Callable, Optional, Tuple

import ipyleaflet
import ipywidgets as W
import solara

from fleetportal.config import CFG

logger = logging.getLogger(__name__)


class MountState(enum.Enum):
    NOT_READY = "not-ready"
    READY = "ready"


def build_marker_icon() -> ipyleaflet.Icon:
    """Leaflet's default pin, pointed at explicit asset URLs instead of the library's lookup."""
    return ipyleaflet.Icon(
        icon_url=CFG.icon_url,
        shadow_url=CFG.icon_shadow_url,
        icon_size=list(CFG.icon_size),
        icon_anchor=list(CFG.icon_anchor),
        popup_anchor=list(CFG.icon_popup_anchor),
        shadow_size=list(CFG.icon_shadow_size),
    )


class CanvasMount:
    """
    One-way lifecycle gate for the map canvas.

    NOT_READY until `attach()` succeeds; the marker icon is registered during
    that transition so no marker can exist without it. A failed attach is
    logged and leaves the gate closed (the placeholder stays up).
    """

    def __init__(self, icon_factory: Callable[[], ipyleaflet.Icon] = build_marker_icon):
        self._icon_factory = icon_factory
        self.state = MountState.NOT_READY
        self.icon: Optional[ipyleaflet.Icon] = None

    @property
    def ready(self) -> bool:
        return self.state is MountState.READY

    def attach(self) -> bool:
        """Register icon assets and open the gate. Returns True only on the transition."""
        if self.ready:
            return False
        try:
            icon = self._icon_factory()
        except Exception:
            logger.exception("Map canvas failed to initialise; keeping placeholder")
            return False
        self.icon = icon
        self.state = MountState.READY
        logger.info("Map canvas ready (icon: %s)", getattr(icon, "icon_url", "?"))
        return True


def use_canvas_mount(
    icon_factory: Callable[[], ipyleaflet.Icon] = build_marker_icon,
) -> Tuple[MountState, Optional[ipyleaflet.Icon]]:
    """
    Hook returning (mount_state, icon).
    Attaches from a mount effect, i.e. once the component is on a live page.
    """
    gate = solara.use_memo(lambda: CanvasMount(icon_factory), [])
    state, set_state = solara.use_state(gate.state)

    def _attach():
        if gate.attach():
            set_state(gate.state)
    solara.use_effect(_attach, [])

    return state, gate.icon


@solara.component
def MapPlaceholder(message: str = ""):
    with solara.Card(style={"height": CFG.map_height}):
        with solara.Row(justify="center", style={"height": "100%", "alignItems": "center"}):
            W.HTML.element(value=message or CFG.placeholder_text)
