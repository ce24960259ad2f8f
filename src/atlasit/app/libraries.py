"""
AtlasIT - Application Layer for Library Maps and Charts.

- Collection-size bands per region (pie chart).
- State libraries per region and per province (choropleths).
- Library locations (point map).
"""
import io
from typing import Any, Dict, List, Optional, Union

import geopandas as gpd
import pandas as pd

from atlasit.app.session import VizSession, fetch_source
from atlasit.core.catalog import ramps
from atlasit.core.catalog.sources import (
    get_general_info_spec,
    get_province_libraries_spec,
    get_source_spec,
    get_state_libraries_spec,
)
from atlasit.core.logic import colors, features, tables
from atlasit.core.logic.series import ChartSeries
from atlasit.settings import logger

DEFAULT_VOLUME_REGION = "Emilia Romagna"


# --- Collection Sizes ---

def _general_info_records(
    year: str, session: Optional[VizSession], data_root: Optional[str]
) -> List[Dict[str, Any]]:
    spec = get_general_info_spec(year)
    payload = fetch_source(spec.path, as_json=True, session=session, data_root=data_root)
    records = payload.get(spec.table_key) if isinstance(payload, dict) else None
    if not isinstance(records, list):
        logger.error(f"Expected a list under '{spec.table_key}' for {year}.")
        return []
    return records


def list_volume_regions(
    year: str = "2014",
    *,
    data_root: Optional[str] = None,
    session: Optional[VizSession] = None,
) -> List[str]:
    """Regions available in one year's collection-size table."""
    regions = tables.table_row_labels(_general_info_records(year, session, data_root))
    if not regions:
        logger.warning(f"    ⚠️ No regions found for {year}.")
    return regions


def load_library_volumes(
    year: str = "2014",
    region: Optional[str] = None,
    *,
    data_root: Optional[str] = None,
    session: Optional[VizSession] = None,
    control: str = "volumes",
) -> Optional[ChartSeries]:
    """
    Libraries per collection-size band for one region and year.

    Without ``region`` the default region is used when present, otherwise
    the first region of the table. Returns None when there is no such row;
    with a session, None also replaces the control's previous series.
    """
    ticket = session.begin(control, f"{year}:{region or ''}") if session else None
    records = _general_info_records(year, session, data_root)

    series = None
    if region is None:
        available = tables.table_row_labels(records)
        if available:
            region = DEFAULT_VOLUME_REGION if DEFAULT_VOLUME_REGION in available else available[0]

    values = tables.table_row_values(records, region, ramps.VOLUME_BAND_LABELS) if region else None
    if values is not None:
        series = ChartSeries(label=region, labels=list(values), values=list(values.values()))

    if ticket is not None:
        session.commit(ticket, series)
    return series


def volume_colors(labels=ramps.VOLUME_BAND_LABELS) -> List[str]:
    """Fixed slice colors of the collection-size bands."""
    return colors.label_colors(labels, ramps.VOLUME_BAND_COLORS)


# --- Choropleths ---

def load_state_libraries_map(
    year: int,
    *,
    data_root: Optional[str] = None,
    session: Optional[VizSession] = None,
    control: str = "state_libraries",
) -> Dict[str, Any]:
    """
    Region polygons with the year's state-library count as ``value`` and the
    ramp color as ``fillColor``. Regions missing from the data get 0.
    """
    spec = get_state_libraries_spec(year)
    ticket = session.begin(control, spec.name) if session else None

    # Base geometry is shared across years: fetched once per session
    base = fetch_source(spec.base_geometry, as_json=True, session=session, data_root=data_root)
    data = fetch_source(spec.path, as_json=True, session=session, data_root=data_root)

    values = features.records_to_values(data if isinstance(data, list) else [])
    joined = features.attach_values(base, values, key=spec.join_key)
    styled = features.style_features(joined, colors.state_library_ramp())

    if ticket is not None:
        session.commit(ticket, styled)
    logger.info(f"✅ Built state-library map for {year} ({len(values)} values).")
    return styled


def load_province_libraries_map(
    year: int,
    *,
    data_root: Optional[str] = None,
    session: Optional[VizSession] = None,
    control: str = "province_libraries",
) -> Dict[str, Any]:
    """Province polygons with the year's library count, matched by name."""
    spec = get_province_libraries_spec(year)
    ticket = session.begin(control, spec.name) if session else None

    base = fetch_source(spec.base_geometry, as_json=True, session=session, data_root=data_root)
    payload = fetch_source(spec.path, as_json=True, session=session, data_root=data_root)

    records = payload.get(spec.table_key, []) if isinstance(payload, dict) else []
    if not records:
        logger.warning(f"    ⚠️ Table '{spec.table_key}' missing or empty.")
    values = tables.table_column_map(records, spec.value_column)

    joined = features.attach_values(base, values, key=spec.join_key)
    styled = features.style_features(joined, colors.province_library_ramp())

    if ticket is not None:
        session.commit(ticket, styled)
    return styled


# --- Locations ---

def load_library_points(
    source: str = "biblioteche_posizioni",
    *,
    as_geojson: bool = False,
    data_root: Optional[str] = None,
    session: Optional[VizSession] = None,
    control: str = "library_points",
) -> Union[gpd.GeoDataFrame, Dict[str, Any]]:
    """Library locations as points, through the source's PointSchema."""
    spec = get_source_spec(source)
    if spec.point_schema is None:
        raise ValueError(f"Source '{source}' declares no point schema.")

    ticket = session.begin(control, source) if session else None

    text = fetch_source(spec.path, session=session, data_root=data_root)
    df = pd.read_csv(io.StringIO(text), sep=spec.delimiter, dtype=str, keep_default_na=False)

    gdf = features.points_from_records(df.to_dict("records"), spec.point_schema)
    gdf["markerColor"] = colors.marker_color()
    result = features.to_feature_collection(gdf) if as_geojson else gdf

    if ticket is not None:
        session.commit(ticket, result)
    logger.info(f"✅ Loaded {len(gdf)} library locations.")
    return result
