# fleetportal/app.py
# solara run fleetportal/app.py
from __future__ import annotations
import logging
from typing import Optional

import solara

from fleetportal.config import CFG
from fleetportal.errors import ErrorCard, Toast, use_toast
from fleetportal.fleet_map import FleetMap
from fleetportal.logging_config import setup_logging
from fleetportal.models import Vessel
from fleetportal.snapshot_loader import load_snapshot

setup_logging(CFG.log_level, CFG.log_file)
logger = logging.getLogger(__name__)


@solara.component
def SelectedVessel(vessel: Optional[Vessel]):
    with solara.Div(style={"marginTop": "8px"}):
        solara.Markdown("**Selected vessel:**")
        if vessel is None:
            solara.Markdown("_None selected_")
            return
        solara.Markdown(
            f"{vessel.name} ({vessel.type}) · {vessel.speed:g} {CFG.speed_unit} · "
            f"{vessel.heading:g}° · {vessel.owner_name}"
        )


@solara.component
def Page():
    toast_msg, toast_kind, show_toast, hide_toast = use_toast()
    selected, set_selected = solara.use_state(None)

    # ---- Snapshot (loaded once per page session) ----
    vessels, regions, load_err = solara.use_memo(
        lambda: load_snapshot(CFG.vessels_path, CFG.regions_path), []
    )

    def _report_error():
        if load_err:
            show_toast(load_err, "error")
    solara.use_effect(_report_error, [load_err])

    def on_vessel_click(vessel: Vessel):
        logger.info("Selected vessel %s (%s)", vessel.id, vessel.name)
        set_selected(vessel)

    # ---- UI ----
    with solara.Column(gap="0.75rem"):
        solara.Markdown(f"### 🚢 {CFG.app_title}")
        solara.Markdown("Live position of the fleet and its operational regions.")

        if load_err:
            ErrorCard(CFG.load_error_text)

        FleetMap(vessels, regions, on_vessel_click=on_vessel_click)
        SelectedVessel(selected)

        Toast(
            message=toast_msg,
            kind=toast_kind,
            on_close=hide_toast,
        )
