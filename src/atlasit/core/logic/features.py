"""
AtlasIT - Core Logic for Map Features.

Builds the GeoJSON the map layer consumes: point features from location
records (through a declared PointSchema) and choropleth polygons with a
joined value and ramp color. Inputs are never mutated.
"""

import copy
from typing import Any, Callable, Dict, Iterable, Mapping

import geopandas as gpd
import pandas as pd

from atlasit.core.catalog.sources import PointSchema
from atlasit.settings import logger


def points_from_records(
    records: Iterable[Mapping[str, Any]],
    schema: PointSchema,
    crs: str = "EPSG:4326",
) -> gpd.GeoDataFrame:
    """
    Converts location records into a point GeoDataFrame.

    Columns are renamed to id/name plus the schema's extra fields. Rows in
    ``schema.excluded_names`` and rows without numeric coordinates are
    left out.
    """
    df = pd.DataFrame(list(records))
    columns = ["id", "name", *schema.extra_fields.keys()]

    required = [schema.id_field, schema.name_field, schema.lat_field, schema.lon_field]
    missing = [c for c in required if c not in df.columns]
    if df.empty or missing:
        if missing and not df.empty:
            logger.warning(f"    ⚠️ Point records lack fields {missing}.")
        return gpd.GeoDataFrame(columns=columns + ["geometry"], geometry="geometry", crs=crs)

    df = df[~df[schema.name_field].isin(schema.excluded_names)]

    lat = pd.to_numeric(df[schema.lat_field], errors="coerce")
    lon = pd.to_numeric(df[schema.lon_field], errors="coerce")
    valid = lat.notna() & lon.notna()
    if (~valid).any():
        logger.info(f"    ℹ️  Skipping {int((~valid).sum())} records without coordinates.")

    df, lat, lon = df[valid], lat[valid], lon[valid]

    out = pd.DataFrame({
        "id": df[schema.id_field].values,
        "name": df[schema.name_field].values,
    })
    for target, source in schema.extra_fields.items():
        out[target] = df[source].values if source in df.columns else None

    return gpd.GeoDataFrame(
        out,
        geometry=gpd.points_from_xy(lon.values, lat.values),
        crs=crs,
    )


def to_feature_collection(gdf: gpd.GeoDataFrame) -> Dict[str, Any]:
    """GeoJSON FeatureCollection dict of a GeoDataFrame."""
    if gdf.empty:
        return {"type": "FeatureCollection", "features": []}
    return gdf.__geo_interface__


def _feature_key(feature: Mapping[str, Any], key: str) -> Any:
    if key == "id" and "id" in feature:
        return feature["id"]
    return (feature.get("properties") or {}).get(key)


def attach_values(
    base: Mapping[str, Any],
    values: Mapping[Any, Any],
    *,
    key: str = "id",
    default: float = 0,
    value_property: str = "value",
) -> Dict[str, Any]:
    """
    Joins ``values`` onto a copy of a FeatureCollection.

    Each feature is matched on its top-level ``id`` (key='id') or on a
    property of that name; unmatched features get ``default``.
    """
    joined = copy.deepcopy(dict(base))
    unmatched = 0
    for feature in joined.get("features", []):
        props = feature.setdefault("properties", {})
        if props is None:
            props = feature["properties"] = {}
        k = _feature_key(feature, key)
        if k in values:
            props[value_property] = values[k]
        else:
            props[value_property] = default
            unmatched += 1

    if unmatched:
        logger.info(f"    ℹ️  {unmatched} features without a value (set to {default}).")
    return joined


def style_features(
    collection: Mapping[str, Any],
    ramp: Callable[[float], str],
    *,
    value_property: str = "value",
    color_property: str = "fillColor",
) -> Dict[str, Any]:
    """Copy of a FeatureCollection with a ramp color stamped on each feature."""
    styled = copy.deepcopy(dict(collection))
    for feature in styled.get("features", []):
        props = feature.get("properties") or {}
        value = props.get(value_property)
        props[color_property] = ramp(value if isinstance(value, (int, float)) else 0)
        feature["properties"] = props
    return styled


def records_to_values(
    records: Iterable[Mapping[str, Any]],
    *,
    id_field: str = "id",
    value_field: str = "value",
) -> Dict[Any, Any]:
    """{id: value} lookup from a list of records (later duplicates win)."""
    out: Dict[Any, Any] = {}
    for record in records:
        if id_field in record:
            out[record[id_field]] = record.get(value_field, 0)
    return out

