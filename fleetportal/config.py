# fleetportal/config.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path

from fleetportal.models import GENERAL, PORT, RESTRICTED

LEAFLET_IMAGES = "https://unpkg.com/leaflet@1.9.4/dist/images"


@dataclass(frozen=True)
class Config:
    # --- App & map basics ---
    app_title: str = "Live Fleet Map"
    map_center: tuple[float, float] = (27.1865, 56.2808)
    map_zoom: int = 8
    map_height: str = "600px"
    map_width: str = "100%"

    # Base tiles
    tiles_url: str = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
    tiles_attribution: str = "© OpenStreetMap contributors"
    tiles_max_zoom: int = 19

    # Layer groups (names also show up in the map's layer list)
    vessel_layer_name: str = "Vessels"
    region_layer_name: str = "Operational Regions"

    # Default layer flags
    show_vessels: bool = True
    show_regions: bool = True
    show_ports: bool = True
    layers_panel_open: bool = False

    # Marker icon assets (Leaflet's default pin)
    icon_url: str = f"{LEAFLET_IMAGES}/marker-icon.png"
    icon_shadow_url: str = f"{LEAFLET_IMAGES}/marker-shadow.png"
    icon_size: tuple[int, int] = (25, 41)
    icon_anchor: tuple[int, int] = (12, 41)
    icon_popup_anchor: tuple[int, int] = (1, -34)
    icon_shadow_size: tuple[int, int] = (41, 41)
    rotate_markers_by_heading: bool = True

    # -----------------------------
    # Region styling (by classification)
    # -----------------------------
    region_colors: dict[str, str] = field(
        default_factory=lambda: {
            PORT: "#3b82f6",       # blue
            RESTRICTED: "#ef4444",  # red
            GENERAL: "#10b981",    # green
        }
    )
    region_default_kind: str = GENERAL
    region_fill_opacity: float = 0.2
    region_weight: int = 2

    # --- Popups & UI text ---
    speed_unit: str = "kn"
    no_description_text: str = "No description"
    placeholder_text: str = "Preparing map..."
    load_error_text: str = "Could not load fleet and region data. Please try again."
    popup_min_width: int = 200

    # --- Snapshot files (host page) ---
    data_dir: Path = Path("data")
    vessels_file: str = "vessels.csv"
    regions_file: str = "regions.geojson"

    # --- Logging ---
    log_level: int = logging.INFO
    log_file: str | None = None

    @property
    def vessels_path(self) -> Path:
        return self.data_dir / self.vessels_file

    @property
    def regions_path(self) -> Path:
        return self.data_dir / self.regions_file


CFG = Config()
