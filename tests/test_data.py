"""
Tests for loading life expectancy values (CSV) and country boundaries (GeoJSON).
"""

import json
import os
import tempfile
import unittest

from core.config import DATA_DIR, DEFAULT_CONFIG, MapConfig
from core.data import load_map_data, load_regions, load_values
from core.errors import LoadError
from core.regions import MultiPolygon, RegionIndex, SinglePolygon

WORLD_BANK_CSV = """Series Name,Series Code,Country Name,Country Code,2012 [YR2012]
"Life expectancy at birth, total (years)",SP.DYN.LE00.IN,United States,USA,78.5
"Life expectancy at birth, total (years)",SP.DYN.LE00.IN,Japan,JPN,84.2
"Life expectancy at birth, total (years)",SP.DYN.LE00.IN,"Korea, Dem. Rep.",PRK,..
"Life expectancy at birth, total (years)",SP.DYN.LE00.IN,Nowhere,,70.0
,,,,
Data from database: World Development Indicators,,,,
"""


def square(x0, y0, x1, y1):
    return [[[x0, y0], [x1, y0], [x1, y1], [x0, y1], [x0, y0]]]


def feature(fid, name, geometry, **properties):
    props = {"name": name}
    props.update(properties)
    out = {"type": "Feature", "properties": props, "geometry": geometry}
    if fid is not None:
        out["id"] = fid
    return out


class TempDirTestCase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmpdir = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def write(self, name, text):
        path = os.path.join(self.tmpdir, name)
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(text)
        return path

    def write_geojson(self, name, features):
        return self.write(name, json.dumps({"type": "FeatureCollection", "features": features}))


class TestLoadValues(TempDirTestCase):
    """Tests for load_values."""

    def test_world_bank_layout(self):
        path = self.write("values.csv", WORLD_BANK_CSV)
        values = load_values(path)
        self.assertEqual(values, {"USA": 78.5, "JPN": 84.2})

    def test_missing_value_rows_are_skipped(self):
        path = self.write("values.csv", WORLD_BANK_CSV)
        values = load_values(path)
        self.assertNotIn("PRK", values)
        self.assertNotIn("", values)

    def test_headerless_by_index(self):
        path = self.write("values.csv", "USA,78.5\nJPN,84.2\nFRA,n/a\n")
        self.assertEqual(load_values(path, code_column=0, value_column=1), {"USA": 78.5, "JPN": 84.2})

    def test_duplicate_codes_last_wins(self):
        path = self.write("values.csv", "code,value\nUSA,70\nUSA,75.5\n")
        self.assertEqual(load_values(path, code_column="code", value_column="value"), {"USA": 75.5})

    def test_unknown_column_name_falls_back_to_position(self):
        path = self.write("values.csv", "code,value\nUSA,70\n")
        self.assertEqual(load_values(path, code_column="Country Code", value_column="Year"), {"USA": 70.0})

    def test_column_index_out_of_range_raises(self):
        path = self.write("values.csv", "code,value\nUSA,70\n")
        with self.assertRaises(LoadError):
            load_values(path, code_column=0, value_column=5)

    def test_default_columns_without_header(self):
        path = self.write("values.csv", "USA,78.5\nJPN,84.2\n")
        self.assertEqual(load_values(path), {"USA": 78.5, "JPN": 84.2})

    def test_default_columns_with_generic_header(self):
        path = self.write("values.csv", "code,value\nUSA,78.5\n")
        self.assertEqual(load_values(path), {"USA": 78.5})

    def test_overlong_row_is_skipped(self):
        path = self.write("values.csv", "USA,78.5\nJPN,84.2,extra\nFRA,81.0\n")
        self.assertEqual(load_values(path, 0, 1), {"USA": 78.5, "FRA": 81.0})

    def test_missing_file_raises(self):
        with self.assertRaises(LoadError) as ctx:
            load_values(os.path.join(self.tmpdir, "nope.csv"))
        self.assertIn("nope.csv", ctx.exception.path)

    def test_empty_file_raises(self):
        path = self.write("values.csv", "")
        with self.assertRaises(LoadError):
            load_values(path)


class TestLoadRegions(TempDirTestCase):
    """Tests for load_regions."""

    def test_polygon_and_multipolygon(self):
        path = self.write_geojson("countries.geo.json", [
            feature("USA", "United States", {"type": "Polygon", "coordinates": square(-100, 30, -80, 45)}),
            feature("JPN", "Japan", {
                "type": "MultiPolygon",
                "coordinates": [square(130, 31, 141, 40), square(140, 41, 145, 45)],
            }),
        ])
        usa, jpn = load_regions(path)

        self.assertEqual((usa.id, usa.name), ("USA", "United States"))
        self.assertIsInstance(usa.shape, SinglePolygon)
        self.assertIsInstance(jpn.shape, MultiPolygon)
        self.assertEqual(len(jpn.parts()), 2)
        self.assertTrue(jpn.contains(143, 43))
        self.assertFalse(usa.is_selected)

    def test_properties_preserved(self):
        path = self.write_geojson("countries.geo.json", [
            feature("FRA", "France", {"type": "Polygon", "coordinates": square(0, 40, 10, 50)}, iso2="FR"),
        ])
        (fra,) = load_regions(path)
        self.assertEqual(fra.properties, {"name": "France", "iso2": "FR"})

    def test_id_from_properties_and_name_fallback(self):
        path = self.write_geojson("countries.geo.json", [
            {"type": "Feature", "properties": {"id": "FRA"},
             "geometry": {"type": "Polygon", "coordinates": square(0, 40, 10, 50)}},
        ])
        (fra,) = load_regions(path)
        self.assertEqual(fra.id, "FRA")
        self.assertEqual(fra.name, "FRA")

    def test_null_top_level_id_uses_properties(self):
        path = self.write_geojson("countries.geo.json", [
            {"type": "Feature", "id": None, "properties": {"id": "FRA", "name": "France"},
             "geometry": {"type": "Polygon", "coordinates": square(0, 40, 10, 50)}},
        ])
        (fra,) = load_regions(path)
        self.assertEqual(fra.id, "FRA")

    def test_properties_not_an_object_raises(self):
        path = self.write_geojson("countries.geo.json", [
            {"type": "Feature", "id": "FRA", "properties": ["bad"],
             "geometry": {"type": "Polygon", "coordinates": square(0, 40, 10, 50)}},
        ])
        with self.assertRaises(LoadError):
            load_regions(path)

    def test_non_polygon_features_skipped(self):
        path = self.write_geojson("countries.geo.json", [
            feature("PT", "A point", {"type": "Point", "coordinates": [1, 2]}),
            feature("NUL", "No geometry", None),
            feature(None, "No id", {"type": "Polygon", "coordinates": square(0, 0, 1, 1)}),
            feature("FRA", "France", {"type": "Polygon", "coordinates": square(0, 40, 10, 50)}),
        ])
        self.assertEqual([r.id for r in load_regions(path)], ["FRA"])

    def test_missing_file_raises(self):
        with self.assertRaises(LoadError):
            load_regions(os.path.join(self.tmpdir, "missing.geo.json"))

    def test_invalid_json_raises(self):
        path = self.write("countries.geo.json", "{not json")
        with self.assertRaises(LoadError):
            load_regions(path)

    def test_not_a_feature_collection_raises(self):
        path = self.write("countries.geo.json", json.dumps({"type": "Feature"}))
        with self.assertRaises(LoadError):
            load_regions(path)

    def test_malformed_geometry_raises(self):
        path = self.write_geojson("countries.geo.json", [
            feature("BAD", "Bad", {"type": "Polygon", "coordinates": [[[0, 0], [1, 1]]]}),
        ])
        with self.assertRaises(LoadError):
            load_regions(path)


class TestLoadMapData(TempDirTestCase):
    """Tests for the combined startup load."""

    def test_joins_and_shades(self):
        values_path = self.write("values.csv", WORLD_BANK_CSV)
        regions_path = self.write_geojson("countries.geo.json", [
            feature("USA", "United States", {"type": "Polygon", "coordinates": square(-100, 30, -80, 45)}),
            feature("FRA", "France", {"type": "Polygon", "coordinates": square(0, 40, 10, 50)}),
        ])
        config = MapConfig(values_path=values_path, regions_path=regions_path)

        data = load_map_data(config)

        self.assertIsInstance(data["regions"], RegionIndex)
        self.assertEqual(data["regions"].get("FRA").fill_color, DEFAULT_CONFIG.fallback_color)
        self.assertNotEqual(data["regions"].get("USA").fill_color, DEFAULT_CONFIG.fallback_color)

    def test_missing_values_file_is_fatal(self):
        regions_path = self.write_geojson("countries.geo.json", [])
        config = MapConfig(values_path=os.path.join(self.tmpdir, "gone.csv"), regions_path=regions_path)
        with self.assertRaises(LoadError):
            load_map_data(config)

    def test_bundled_assets_load(self):
        data = load_map_data(MapConfig(values_path=DATA_DIR / "LifeExpectancyWorldBank.csv",
                                       regions_path=DATA_DIR / "countries.geo.json"))
        self.assertGreater(len(data["regions"]), 0)
        self.assertIn("USA", data["values"])
        self.assertNotIn("PRK", data["values"])


if __name__ == "__main__":
    unittest.main(verbosity=2)
