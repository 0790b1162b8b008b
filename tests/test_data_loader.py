"""Tests for candidate parsing from CSV, JSON and GeoJSON."""

import json
from pathlib import Path

import pytest

from parkrank.data_loader import load_candidates_from_file, parse_candidates


def _feature(geometry: dict, **props) -> dict:
    return {"type": "Feature", "properties": props, "geometry": geometry}


SQUARE = [[0, 0], [2, 0], [2, 2], [0, 2], [0, 0]]


class TestParseCandidates:
    def test_list_of_rows(self) -> None:
        rows = [
            {"id": 7, "name": "Lot 7", "lat": "19.07", "lng": "72.88", "demand": "0.4"},
            {"ID": "B2", "label": "Garage", "latitude": 19.08, "longitude": 72.89, "probability": 65},
        ]
        first, second = parse_candidates(rows)
        assert (first.id, first.name, first.latitude, first.longitude) == (7, "Lot 7", 19.07, 72.88)
        assert first.historical_demand == 0.4
        assert (second.id, second.name, second.historical_demand) == ("B2", "Garage", 65.0)

    def test_rows_without_coordinates_are_skipped(self) -> None:
        rows = [{"name": "nowhere"}, {"name": "bad", "lat": "x", "lng": "1"}, {"lat": 1, "lng": 2}]
        (only,) = parse_candidates(rows)
        assert only.latitude == 1.0
        assert only.id == "2"
        assert only.name == "Parking spot 2"

    def test_missing_demand_defaults_to_zero(self) -> None:
        (c,) = parse_candidates([{"id": 1, "lat": 1, "lng": 1}])
        assert c.historical_demand == 0.0

    def test_demand_derived_from_capacity(self) -> None:
        (c,) = parse_candidates([{"id": 1, "lat": 1, "lng": 1, "HANDICAP_SPACE": "2", "CAPACITY": "10"}])
        assert c.historical_demand == pytest.approx(0.55)

    def test_point_feature(self) -> None:
        fc = {"type": "FeatureCollection", "features": [_feature({"type": "Point", "coordinates": [72.88, 19.07]}, LOT_NAME="P1")]}
        (c,) = parse_candidates(fc)
        assert (c.latitude, c.longitude, c.name) == (19.07, 72.88, "P1")

    def test_polygon_feature_uses_centroid(self) -> None:
        fc = {"features": [_feature({"type": "Polygon", "coordinates": [SQUARE]}, OBJECTID=3)]}
        (c,) = parse_candidates(fc)
        assert c.id == 3
        assert c.latitude == pytest.approx(1.0)
        assert c.longitude == pytest.approx(1.0)

    def test_multipolygon_uses_first_polygon(self) -> None:
        other = [[10, 10], [12, 10], [12, 12], [10, 12], [10, 10]]
        fc = {"features": [_feature({"type": "MultiPolygon", "coordinates": [[SQUARE], [other]]})]}
        (c,) = parse_candidates(fc)
        assert (c.latitude, c.longitude) == (pytest.approx(1.0), pytest.approx(1.0))

    def test_degenerate_ring_uses_vertex_average(self) -> None:
        line = [[0, 0], [1, 1], [2, 2], [0, 0]]
        fc = {"features": [_feature({"type": "Polygon", "coordinates": [line]})]}
        (c,) = parse_candidates(fc)
        assert c.longitude == pytest.approx(0.75)

    def test_unsupported_payload(self) -> None:
        with pytest.raises(ValueError):
            parse_candidates("not a collection")


class TestLoadFromFile:
    def test_csv(self, tmp_path: Path) -> None:
        path = tmp_path / "spots.csv"
        path.write_text("id,name,lat,lon,demand\n1,Colaba,18.91,72.82,0.7\n2,Broken,,72.8,0.1\n", encoding="utf-8")
        result = load_candidates_from_file(str(path))
        assert result.source == str(path)
        (c,) = result.candidates
        assert (c.id, c.name, c.historical_demand) == ("1", "Colaba", 0.7)

    def test_geojson(self, tmp_path: Path) -> None:
        path = tmp_path / "lots.geojson"
        fc = {"type": "FeatureCollection", "features": [_feature({"type": "Point", "coordinates": [1, 2]}, name="A")]}
        path.write_text(json.dumps(fc), encoding="utf-8")
        (c,) = load_candidates_from_file(str(path)).candidates
        assert (c.latitude, c.longitude) == (2.0, 1.0)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_candidates_from_file(str(tmp_path / "absent.geojson"))

    def test_unsupported_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "spots.xml"
        path.write_text("<spots/>", encoding="utf-8")
        with pytest.raises(ValueError, match="Unsupported file extension"):
            load_candidates_from_file(str(path))

    def test_unsupported_json_structure(self, tmp_path: Path) -> None:
        path = tmp_path / "spots.json"
        path.write_text('"just a string"', encoding="utf-8")
        with pytest.raises(ValueError, match="Unsupported JSON structure"):
            load_candidates_from_file(str(path))


class TestMalformedGeometry:
    def test_bad_point_is_skipped_not_fatal(self) -> None:
        fc = {
            "type": "FeatureCollection",
            "features": [
                _feature({"type": "Point", "coordinates": [72.88, 19.07]}, id=1),
                _feature({"type": "Point", "coordinates": [None, "abc"]}, id=2),
            ],
        }
        assert [c.id for c in parse_candidates(fc)] == [1]

    def test_bad_polygon_vertex_is_skipped(self) -> None:
        broken = [[0, 0], ["x", 0], [2, 2], [0, 2], [0, 0]]
        fc = {
            "features": [
                _feature({"type": "Polygon", "coordinates": [broken]}, id="bad"),
                _feature({"type": "Polygon", "coordinates": [SQUARE]}, id="good"),
                _feature({"type": "Point", "coordinates": [1, float("nan")]}, id="nan"),
                _feature({"type": "Point", "coordinates": [1, 1]}, id="no-props") | {"properties": ["oops"]},
            ]
        }
        assert [c.id for c in parse_candidates(fc)] == ["good", "3"]

    def test_file_with_one_bad_feature_still_loads(self, tmp_path: Path) -> None:
        path = tmp_path / "lots.geojson"
        fc = {
            "type": "FeatureCollection",
            "features": [
                _feature({"type": "Point", "coordinates": [1, 2]}, id=1),
                _feature({"type": "Point", "coordinates": [{}, []]}, id=2),
            ],
        }
        path.write_text(json.dumps(fc), encoding="utf-8")
        assert [c.id for c in load_candidates_from_file(str(path)).candidates] == [1]
