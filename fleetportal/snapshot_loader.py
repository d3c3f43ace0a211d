# fleetportal/snapshot_loader.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, TypeVar

import pandas as pd

from fleetportal.errors import SnapshotError
from fleetportal.models import Region, Vessel

logger = logging.getLogger(__name__)

T = TypeVar("T", Vessel, Region)

# CSV header aliases -> record keys understood by Vessel.from_record
_VESSEL_COLUMNS = {
    "latitude": "lat",
    "longitude": "lng",
    "lon": "lng",
    "owner": "owner_name",
    "ownerName": "owner_name",
}


def _read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _unique_by_id(records: Iterable[T], what: str) -> Tuple[T, ...]:
    seen: Dict[str, T] = {}
    for rec in records:
        if rec.id in seen:
            logger.warning("Duplicate %s id %r in snapshot; keeping the first", what, rec.id)
            continue
        seen[rec.id] = rec
    return tuple(seen.values())


# =====================================================================
# VESSELS
# =====================================================================
def _vessel_rows_from_csv(path: Path) -> List[Dict[str, Any]]:
    df = pd.read_csv(path, dtype={"id": str})
    df = df.rename(columns=_VESSEL_COLUMNS)
    missing = {"id", "lat", "lng"} - set(df.columns)
    if missing:
        raise SnapshotError(f"{path} is missing column(s): {', '.join(sorted(missing))}")
    # NaN -> None so optional fields fall back to their defaults
    df = df.astype(object).where(pd.notna(df), None)
    return df.to_dict(orient="records")


def load_vessels(path: Path) -> Tuple[Vessel, ...]:
    """
    Read a vessel snapshot: CSV (one row per vessel) or JSON (list of records).
    Raises SnapshotError on unreadable files or unusable rows.
    """
    path = Path(path)
    if not path.exists():
        raise SnapshotError(f"Vessel snapshot not found: {path}")

    try:
        if path.suffix.lower() == ".csv":
            rows = _vessel_rows_from_csv(path)
        else:
            rows = _read_json(path)
            if isinstance(rows, dict):
                rows = rows.get("vessels", [])
    except SnapshotError:
        raise
    except (OSError, ValueError, pd.errors.ParserError) as e:
        raise SnapshotError(f"Failed to read vessels from {path}: {e}") from e

    vessels = []
    for i, row in enumerate(rows):
        try:
            vessels.append(Vessel.from_record(row))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise SnapshotError(f"Bad vessel record #{i} in {path}: {e}") from e

    logger.info("Loaded %d vessels from %s", len(vessels), path)
    return _unique_by_id(vessels, "vessel")


# =====================================================================
# REGIONS
# =====================================================================
def load_regions(path: Path) -> Tuple[Region, ...]:
    """
    Read a region snapshot: GeoJSON FeatureCollection of Polygons, or a JSON
    list of region records (``geometry.coordinates[0]`` is the ring).
    """
    path = Path(path)
    if not path.exists():
        raise SnapshotError(f"Region snapshot not found: {path}")

    try:
        data = _read_json(path)
    except (OSError, ValueError) as e:
        raise SnapshotError(f"Failed to read regions from {path}: {e}") from e

    if isinstance(data, dict) and data.get("type") == "FeatureCollection":
        features = data.get("features", [])
        build = Region.from_feature
    else:
        features = data if isinstance(data, list) else data.get("regions", [])
        build = Region.from_record

    regions = []
    for i, ft in enumerate(features):
        try:
            gtype = (ft.get("geometry") or {}).get("type")
            if gtype not in (None, "Polygon"):
                logger.info("Skipping region #%d: unsupported geometry %s", i, gtype)
                continue
            region = build(ft)
        except (AttributeError, KeyError, TypeError, ValueError, IndexError) as e:
            raise SnapshotError(f"Bad region record #{i} in {path}: {e}") from e
        if len(region.ring) < 3:
            # rendered anyway; flagged for whoever owns the source data
            logger.warning("Region %r has a ring with %d point(s)", region.id, len(region.ring))
        regions.append(region)

    logger.info("Loaded %d regions from %s", len(regions), path)
    return _unique_by_id(regions, "region")


# =====================================================================
# SNAPSHOT (host-facing, never raises)
# =====================================================================
def load_snapshot(
    vessels_path: Path,
    regions_path: Path,
) -> Tuple[Tuple[Vessel, ...], Tuple[Region, ...], Optional[str]]:
    """
    Returns (vessels, regions, error). On any failure both collections are
    empty and `error` carries the message.
    """
    try:
        vessels = load_vessels(vessels_path)
        regions = load_regions(regions_path)
    except SnapshotError as e:
        logger.error("Snapshot load failed: %s", e)
        return (), (), str(e)
    return vessels, regions, None
