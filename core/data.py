"""
Loading of the two map inputs: life expectancy values (CSV) and country
boundaries (GeoJSON).
"""
import json
import logging
from pathlib import Path

import pandas as pd
from shapely.errors import ShapelyError
from shapely.geometry import MultiPolygon as ShapelyMultiPolygon
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry import shape

from core.colors import shade_regions
from core.config import DEFAULT_CONFIG
from core.errors import LoadError
from core.regions import MultiPolygon, Region, RegionIndex, SinglePolygon

logger = logging.getLogger(__name__)


def _resolve_column(header, column, fallback, path):
    """
    Turn a header name or (possibly negative) index into a positional index.

    A name missing from the first row means the file has no such header (or
    none at all), so the positional fallback is used instead.
    """
    n_cols = len(header)
    if isinstance(column, str):
        names = [str(cell).strip() for cell in header]
        if column in names:
            return names.index(column)
        logger.info("No %r column in %s, using column %d", column, path, fallback % n_cols)
        column = fallback
    if not -n_cols <= column < n_cols:
        raise LoadError(path, f"column index {column} out of range ({n_cols} columns)")
    return column % n_cols


def load_values(source, code_column="Country Code", value_column=-1):
    """
    Parse a delimited file into a mapping of country code -> value.

    Every cell is read as text. Rows whose value is not numeric (the World Bank
    export marks gaps with "..") or whose code is empty are skipped; a header
    row, if present, falls out by the same rule. Rows wider than the first row
    are dropped. Later rows win on duplicate codes.

    Columns are looked up by header name, falling back to the first column for
    the code and the last column for the value when the name is absent.
    """
    bad_lines = []

    def _drop_bad_line(fields):
        bad_lines.append(fields)
        return None

    try:
        frame = pd.read_csv(
            source,
            header=None,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
            encoding="utf-8-sig",
            engine="python",
            on_bad_lines=_drop_bad_line,
        )
    except FileNotFoundError as exc:
        raise LoadError(source, "file not found") from exc
    except pd.errors.EmptyDataError as exc:
        raise LoadError(source, "file is empty") from exc
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as exc:
        raise LoadError(source, f"cannot read values: {exc}") from exc

    if bad_lines:
        logger.debug("Dropped %d malformed rows in %s", len(bad_lines), source)

    header = frame.iloc[0].tolist()
    code_idx = _resolve_column(header, code_column, 0, source)
    value_idx = _resolve_column(header, value_column, -1, source)

    codes = frame[code_idx].fillna("").astype(str).str.strip()
    values = pd.to_numeric(frame[value_idx].str.strip(), errors="coerce")

    keep = (codes != "") & values.notna()
    skipped = int((~keep).sum())
    if skipped:
        logger.debug("Skipped %d non-numeric rows in %s", skipped, source)

    return {code: float(value) for code, value in zip(codes[keep], values[keep])}


def _build_shape(geometry):
    if isinstance(geometry, ShapelyPolygon):
        return SinglePolygon(geometry)
    if isinstance(geometry, ShapelyMultiPolygon):
        return MultiPolygon([SinglePolygon(part) for part in geometry.geoms])
    return None


def load_regions(source):
    """
    Parse a GeoJSON FeatureCollection into one Region per country feature.

    The region id is the feature's top-level "id" (or properties["id"]) and the
    name is properties["name"]. Features that are not polygons are skipped.
    """
    path = Path(source)
    try:
        with path.open(encoding="utf-8") as fh:
            collection = json.load(fh)
    except FileNotFoundError as exc:
        raise LoadError(source, "file not found") from exc
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise LoadError(source, f"cannot read boundaries: {exc}") from exc

    if not isinstance(collection, dict) or collection.get("type") != "FeatureCollection":
        raise LoadError(source, "not a GeoJSON FeatureCollection")
    features = collection.get("features")
    if not isinstance(features, list):
        raise LoadError(source, "FeatureCollection has no feature list")

    regions = []
    for i, feature in enumerate(features):
        if not isinstance(feature, dict):
            raise LoadError(source, f"feature {i} is not an object")
        properties = feature.get("properties")
        if properties is None:
            properties = {}
        elif not isinstance(properties, dict):
            raise LoadError(source, f"feature {i} properties is not an object")
        region_id = feature.get("id")
        if region_id is None:
            region_id = properties.get("id")
        if region_id is None:
            logger.warning("Skipping feature %d in %s: no id", i, source)
            continue
        region_id = str(region_id)

        geometry = feature.get("geometry")
        if geometry is None:
            logger.warning("Skipping %s: no geometry", region_id)
            continue
        try:
            region_shape = _build_shape(shape(geometry))
        except (ShapelyError, ValueError, TypeError, KeyError, IndexError, AttributeError) as exc:
            raise LoadError(source, f"malformed geometry for {region_id}: {exc}") from exc
        if region_shape is None:
            logger.warning("Skipping %s: unsupported geometry %s", region_id, geometry.get("type"))
            continue

        regions.append(Region(
            id=region_id,
            name=str(properties.get("name", region_id)),
            shape=region_shape,
            properties=dict(properties),
        ))
    return regions


def load_map_data(config=DEFAULT_CONFIG):
    """
    Load values and regions from the configured paths and shade every region.

    Returns a dict with "values" (code -> float) and "regions" (RegionIndex).
    """
    logger.info("Loading life expectancy values from %s", config.values_path)
    values = load_values(config.values_path, config.code_column, config.value_column)
    logger.info("Loaded %d values.", len(values))

    logger.info("Loading country boundaries from %s", config.regions_path)
    regions = load_regions(config.regions_path)
    logger.info("Loaded %d regions.", len(regions))

    shade_regions(regions, values, config)
    return {"values": values, "regions": RegionIndex(regions)}
