from __future__ import annotations

import csv
import json
import math
import os
from dataclasses import dataclass
from typing import Any, Iterable

from parkrank.logger import get_logger
from parkrank.models import Candidate

logger = get_logger(__name__)

LAT_KEYS = ["lat", "latitude", "LAT", "LATITUDE", "Y"]
LNG_KEYS = ["lng", "lon", "longitude", "LNG", "LON", "LONGITUDE", "X"]
ID_KEYS = ["id", "ID", "spot_id", "LOT_ID", "objectid", "OBJECTID"]
NAME_KEYS = ["name", "NAME", "label", "LOT_NAME", "MAP_LABEL", "address", "ADDRESS"]
DEMAND_KEYS = ["historical_demand", "demand", "probability", "occupancy", "DEMAND"]
ACCESSIBLE_SPACE_KEYS = ["handicap_spaces", "HANDICAP_SPACE", "accessible_spaces"]
CAPACITY_KEYS = ["capacity", "CAPACITY"]


@dataclass(frozen=True)
class LoadResult:
    candidates: list[Candidate]
    source: str


def _ring_centroid(ring: list) -> tuple[float, float] | None:
    """Centroid (lng, lat) of a GeoJSON linear ring."""
    pts: list[tuple[float, float]] = []
    for p in ring:
        if not isinstance(p, (list, tuple)) or len(p) < 2:
            continue
        x, y = _try_parse_float(p[0]), _try_parse_float(p[1])
        if x is None or y is None:
            return None
        pts.append((x, y))
    if len(pts) < 3:
        return None

    # Shoelace in lng/lat space; fine at parking-lot scale.
    area2 = 0.0
    cx = 0.0
    cy = 0.0
    for (x1, y1), (x2, y2) in zip(pts, pts[1:]):
        cross = x1 * y2 - x2 * y1
        area2 += cross
        cx += (x1 + x2) * cross
        cy += (y1 + y2) * cross

    if abs(area2) < 1e-12:
        return (
            sum(x for x, _ in pts) / len(pts),
            sum(y for _, y in pts) / len(pts),
        )
    return (cx / (3.0 * area2), cy / (3.0 * area2))


def _geometry_latlng(geom: Any) -> tuple[float, float] | None:
    if not isinstance(geom, dict):
        return None

    gtype = geom.get("type")
    coords = geom.get("coordinates")
    if not isinstance(coords, (list, tuple)) or not coords:
        return None

    if gtype == "Point":
        if len(coords) < 2:
            return None
        lng, lat = _try_parse_float(coords[0]), _try_parse_float(coords[1])
        if lat is None or lng is None:
            return None
        return (lat, lng)

    outer = None
    if gtype == "Polygon":
        outer = coords[0]
    elif gtype == "MultiPolygon" and isinstance(coords[0], list) and coords[0]:
        # first polygon's outer ring
        outer = coords[0][0]

    if not isinstance(outer, list):
        return None
    c = _ring_centroid(outer)
    if c is None:
        return None
    lng, lat = c
    return (lat, lng)


def _try_parse_float(v: object) -> float | None:
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        f = float(v)
    else:
        s = str(v).strip()
        if not s:
            return None
        try:
            f = float(s)
        except ValueError:
            return None
    return f if math.isfinite(f) else None


def _row_get(row: dict, keys: Iterable[str]) -> object | None:
    for k in keys:
        if row.get(k) not in (None, ""):
            return row[k]
    return None


def _demand_from_capacity(accessible: float | None, capacity: float | None) -> float | None:
    if accessible is None or capacity is None or capacity <= 0:
        return None
    return max(0.15, min(0.95, 0.25 + (accessible / capacity) * 1.5))


def _normalize_candidate(row: dict, idx: int) -> Candidate | None:
    lat = _try_parse_float(_row_get(row, LAT_KEYS))
    lng = _try_parse_float(_row_get(row, LNG_KEYS))
    if lat is None or lng is None:
        return None

    raw_id = _row_get(row, ID_KEYS)
    if isinstance(raw_id, int) and not isinstance(raw_id, bool):
        candidate_id: int | str = raw_id
    else:
        candidate_id = str(raw_id if raw_id is not None else idx)

    name = _row_get(row, NAME_KEYS)

    demand = _try_parse_float(_row_get(row, DEMAND_KEYS))
    if demand is None:
        demand = _demand_from_capacity(
            _try_parse_float(_row_get(row, ACCESSIBLE_SPACE_KEYS)),
            _try_parse_float(_row_get(row, CAPACITY_KEYS)),
        )

    return Candidate(
        id=candidate_id,
        name=str(name).strip() if name is not None else f"Parking spot {candidate_id}",
        latitude=lat,
        longitude=lng,
        historical_demand=demand if demand is not None else 0.0,
    )


def _rows_from_features(features: list) -> Iterable[dict]:
    for feat in features:
        if not isinstance(feat, dict):
            continue
        props = feat.get("properties")
        row = dict(props) if isinstance(props, dict) else {}
        ll = _geometry_latlng(feat.get("geometry"))
        if ll is not None:
            row.setdefault("lat", ll[0])
            row.setdefault("lng", ll[1])
        yield row


def parse_candidates(obj: Any) -> list[Candidate]:
    """Candidates from a decoded JSON list of rows or a GeoJSON FeatureCollection."""
    if isinstance(obj, dict) and "features" in obj:
        rows = list(_rows_from_features(obj.get("features") or []))
    elif isinstance(obj, list):
        rows = [r for r in obj if isinstance(r, dict)]
    else:
        raise ValueError(f"Unsupported candidate payload: {type(obj).__name__}")

    candidates: list[Candidate] = []
    for idx, row in enumerate(rows):
        c = _normalize_candidate(row, idx)
        if c is not None:
            candidates.append(c)

    skipped = len(rows) - len(candidates)
    if skipped:
        logger.warning("Skipped %d candidate rows without usable coordinates", skipped)
    return candidates


def load_candidates_from_file(path: str) -> LoadResult:
    if not os.path.exists(path):
        raise FileNotFoundError(
            f"Candidate cache file not found: {path}. "
            f"Put a CSV/GeoJSON/JSON file there or set a source URL."
        )

    ext = os.path.splitext(path)[1].lower()
    if ext == ".csv":
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            rows = list(csv.DictReader(f))
        return LoadResult(candidates=parse_candidates(rows), source=path)

    if ext in (".json", ".geojson"):
        with open(path, "r", encoding="utf-8") as f:
            obj = json.load(f)
        try:
            return LoadResult(candidates=parse_candidates(obj), source=path)
        except ValueError as e:
            raise ValueError(f"Unsupported JSON structure in {path}") from e

    raise ValueError(f"Unsupported file extension: {ext} (expected .csv/.json/.geojson)")
