# fleetportal/popups.py
from __future__ import annotations
import html
from typing import Any, Sequence, Tuple

import ipywidgets as W

from fleetportal.config import CFG
from fleetportal.models import Region, Vessel


def _fmt_number(val: Any) -> str:
    if isinstance(val, float) and val.is_integer():
        return str(int(val))
    return str(val)


def _table_html(title: str, rows: Sequence[Tuple[str, str]]) -> str:
    body = "".join(
        f"<tr><th style='text-align:left;padding:2px 8px 2px 0;color:#6b7280'>{html.escape(label)}</th>"
        f"<td style='padding:2px 0'>{html.escape(value)}</td></tr>"
        for label, value in rows
    )
    return (
        f"<div style='min-width:{CFG.popup_min_width}px'>"
        f"<h3 style='font-weight:600;margin:0 0 6px 0'>{html.escape(title)}</h3>"
        f"<table style='border-collapse:collapse;font-size:13px'>{body}</table>"
        "</div>"
    )


def vessel_popup_html(vessel: Vessel) -> str:
    rows = [
        ("Type", vessel.type),
        ("Speed", f"{_fmt_number(vessel.speed)} {CFG.speed_unit}"),
        ("Heading", f"{_fmt_number(vessel.heading)}°"),
        ("Owner", vessel.owner_name),
    ]
    return _table_html(vessel.name, rows)


def region_popup_html(region: Region) -> str:
    desc = region.description if region.description is not None else CFG.no_description_text
    return (
        f"<div style='min-width:{CFG.popup_min_width}px'>"
        f"<h3 style='font-weight:600;margin:0 0 6px 0'>{html.escape(region.name)}</h3>"
        f"<p style='font-size:13px;color:#6b7280;margin:0'>{html.escape(str(desc))}</p>"
        "</div>"
    )


def vessel_popup(vessel: Vessel) -> W.HTML:
    return W.HTML(vessel_popup_html(vessel))


def region_popup(region: Region) -> W.HTML:
    return W.HTML(region_popup_html(region))
