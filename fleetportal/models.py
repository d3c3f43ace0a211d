# fleetportal/models.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Tuple

LngLat = Tuple[float, float]
Ring = Tuple[LngLat, ...]

PORT = "port"
RESTRICTED = "restricted"
GENERAL = "general"


def _first(rec: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first non-None value among `keys` (camelCase / snake_case aliases)."""
    for k in keys:
        if k in rec and rec[k] is not None:
            return rec[k]
    return default


@dataclass(frozen=True)
class Position:
    lat: float
    lng: float


@dataclass(frozen=True)
class Vessel:
    id: str
    position: Position
    speed: float = 0.0
    heading: float = 0.0
    name: str = ""
    type: str = ""
    owner_name: str = ""

    @classmethod
    def from_record(cls, rec: Mapping[str, Any]) -> "Vessel":
        """
        Build a Vessel from an API-style record or a flat table row.

        Accepts either ``{"position": {"lat": .., "lng": ..}}`` or flat
        ``lat``/``lng`` (also ``latitude``/``longitude``) keys.
        """
        pos = rec.get("position")
        if isinstance(pos, Mapping):
            lat = _first(pos, "lat", "latitude")
            lng = _first(pos, "lng", "lon", "longitude")
        else:
            lat = _first(rec, "lat", "latitude")
            lng = _first(rec, "lng", "lon", "longitude")
        if lat is None or lng is None:
            raise ValueError(f"vessel {rec.get('id')!r} has no position")

        return cls(
            id=str(rec["id"]),
            position=Position(float(lat), float(lng)),
            speed=float(_first(rec, "speed", default=0.0)),
            heading=float(_first(rec, "heading", default=0.0)),
            name=str(_first(rec, "name", default="")),
            type=str(_first(rec, "type", default="")),
            owner_name=str(_first(rec, "ownerName", "owner_name", "owner", default="")),
        )


@dataclass(frozen=True)
class Region:
    id: str
    kind: str
    ring: Ring
    name: str = ""
    description: Optional[str] = None

    @property
    def is_port(self) -> bool:
        return self.kind == PORT

    @staticmethod
    def _ring(coords: Sequence[Sequence[float]]) -> Ring:
        # stored as-is; closure and winding are not checked
        return tuple(tuple(pt) for pt in coords)

    @classmethod
    def from_record(cls, rec: Mapping[str, Any]) -> "Region":
        """Region from an API record: ``geometry.coordinates[0]`` is the outer ring."""
        geom = rec.get("geometry") or {}
        coords = geom.get("coordinates") or [[]]
        return cls(
            id=str(rec["id"]),
            kind=_first(rec, "type", "kind", default=GENERAL),
            ring=cls._ring(coords[0]),
            name=str(_first(rec, "name", default="")),
            description=_first(rec, "description"),
        )

    @classmethod
    def from_feature(cls, feature: Mapping[str, Any]) -> "Region":
        """Region from a GeoJSON Polygon feature (id may live on the feature or in properties)."""
        props = dict(feature.get("properties") or {})
        rec = {
            **props,
            "id": _first(feature, "id", default=props.get("id")),
            "geometry": feature.get("geometry") or {},
        }
        if rec["id"] is None:
            raise ValueError("region feature has no id")
        return cls.from_record(rec)
