# fleetportal/errors.py
from __future__ import annotations
import html
from typing import Literal

import solara

ToastType = Literal["info", "error"]

# kind -> (foreground, background)
_COLORS = {
    "info": ("#1e3a8a", "#e0e7ff"),
    "error": ("#7f1d1d", "#fee2e2"),
}


class SnapshotError(RuntimeError):
    """A vessel or region snapshot could not be read or converted."""


def message_html(message: str, color: str, align: str = "left") -> str:
    """Escaped message body; load errors carry paths and exception text."""
    return f"<div style='color:{color};text-align:{align}'>{html.escape(str(message))}</div>"


@solara.component
def Toast(message: str, kind: ToastType = "info", on_close=None):
    """Dismissible banner pinned to the bottom right corner."""
    if not message:
        return
    fg, bg = _COLORS.get(kind, _COLORS["info"])

    with solara.Card(
        elevation=3,
        style={
            "position": "fixed",
            "right": "16px",
            "bottom": "16px",
            "zIndex": "9999",
            "background": bg,
            "border": f"1px solid {fg}",
            "maxWidth": "420px",
        },
    ):
        with solara.Row(justify="space-between", style={"alignItems": "center"}):
            solara.Markdown(message_html(message, fg))
            solara.Button("✕", text=True, on_click=on_close)


@solara.component
def ErrorCard(message: str):
    with solara.Card(style={"border": "1px solid #fca5a5", "background": "#fef2f2"}):
        solara.Markdown(message_html(message, "#b91c1c", align="center"))


def use_toast():
    """(message, kind, show, hide); an empty message hides the toast."""
    toast, set_toast = solara.use_state(("", "info"))

    def show(message: str, kind: ToastType = "info"):
        set_toast((message, kind))

    def hide():
        set_toast(("", "info"))

    return toast[0], toast[1], show, hide
