"""
AtlasIT - Core Catalog for Source Files.

Declares every data file the maps and charts read: where it lives relative
to the data root, its shape, and how to parse it. Per-source field layouts
(point maps) are declared here once instead of being branched on inside
the parsing logic.
"""

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from atlasit.core.types import DecimalConvention, Delimiter, SourceKind

# --- Constants ---

LIBRARIES_DIR = "data/Dati_biblioteche"
GENERAL_INFO_DIR = f"{LIBRARIES_DIR}/Dati_Generali_biblioteche"

# JSON tables published per year for the library-size pie chart
GENERAL_INFO_FILES: Dict[str, str] = {
    "2010-11": "Biblio_Italia_General_info_2010_2011.json",
    "2012": "Biblio_Italia_General_info_2012.json",
    "2013": "Biblio_Italia_General_info_2013.json",
    "2014": "Biblio_Italia_General_info_2014.json",
}
GENERAL_INFO_YEARS: Tuple[str, ...] = tuple(GENERAL_INFO_FILES)
GENERAL_INFO_TABLE = "Tav 4.3"

# First-column values of a JSON table that are not data rows
TABLE_ROW_EXCLUDED: Tuple[str, ...] = ("Totale", "REGIONI")
TABLE_ROW_EXCLUDED_PREFIXES: Tuple[str, ...] = ("ANNO",)

PROVINCE_TABLE_KEY = (
    "Tav. 1 - Numero di Biblioteche statali dipendenti dal MiBact per regioni "
    "e provincie, opere consultate e prestiti a privati e altre biblioteche - Anno {year}"
)

# --- Domain Models ---

class PointSchema(BaseModel):
    """Field-name mapping of a point source (one record per location)."""
    model_config = ConfigDict(frozen=True)

    id_field: str
    name_field: str
    lat_field: str
    lon_field: str
    extra_fields: Dict[str, str] = Field(default_factory=dict)
    excluded_names: Tuple[str, ...] = ()


class SourceSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    kind: SourceKind
    path: str
    description: str = ""

    # Delimited / tabular parsing
    delimiter: Delimiter = ","
    decimal: DecimalConvention = "dot"
    value_index: int = 1

    # JSON tables
    table_key: Optional[str] = None
    value_column: Optional[str] = None

    # Map sources
    base_geometry: Optional[str] = None
    join_key: str = "id"
    point_schema: Optional[PointSchema] = None


LIBRARY_LOCATIONS_SCHEMA = PointSchema(
    id_field="Library_ID",
    name_field="Library_Name",
    lat_field="Library_Latitude",
    lon_field="Library_Longitude",
    extra_fields={"city": "Library_City", "region": "Library_Region"},
    excluded_names=("Biblioteca Medica Statale di Roma",),
)

# --- Registry ---

SOURCE_CATALOG: List[SourceSpec] = [
    SourceSpec(
        name="prestiti_regioni_2022",
        kind="delimited",
        path=f"{GENERAL_INFO_DIR}/PrestitiBiblioRegioni2022.csv",
        description="Library loans 2022 by region, area, population range and classification.",
        delimiter=",",
        decimal="dot",
    ),
    SourceSpec(
        name="lettura_regioni_2021",
        kind="header_table",
        path="Dati-Abitudini-lettura-regioni-2021.csv",
        description="Reading habits 2021 by region (percentages).",
        delimiter=";",
        decimal="comma",
    ),
    *[
        SourceSpec(
            name=f"biblioteche_generali_{year}",
            kind="json_table",
            path=f"{GENERAL_INFO_DIR}/{fname}",
            description=f"Libraries by collection size and region, {year}.",
            table_key=GENERAL_INFO_TABLE,
        )
        for year, fname in GENERAL_INFO_FILES.items()
    ],
    SourceSpec(
        name="eventi_citta_2023",
        kind="key_value",
        path="data/Dati_eventi/city_events_2023.json",
        description="Cultural events per city, 2023 ('city=value' lines).",
    ),
    SourceSpec(
        name="biblioteche_posizioni",
        kind="points",
        path=f"{LIBRARIES_DIR}/Libraries_luoghi_Cultura.csv",
        description="Library locations.",
        point_schema=LIBRARY_LOCATIONS_SCHEMA,
    ),
]

_BY_NAME: Dict[str, SourceSpec] = {s.name: s for s in SOURCE_CATALOG}


def list_sources() -> List[str]:
    return sorted(_BY_NAME)


def get_source_spec(name: str) -> SourceSpec:
    """Looks up a catalog entry by name."""
    try:
        return _BY_NAME[name]
    except KeyError:
        raise KeyError(
            f"Unknown source '{name}'. Available: {list_sources()}"
        ) from None


def get_general_info_spec(year: str) -> SourceSpec:
    if year not in GENERAL_INFO_YEARS:
        raise ValueError(
            f"No general library table for {year}. Use one of {GENERAL_INFO_YEARS}."
        )
    return get_source_spec(f"biblioteche_generali_{year}")


def get_state_libraries_spec(year: int) -> SourceSpec:
    """Choropleth of state libraries per region for one year."""
    return SourceSpec(
        name=f"biblioteche_statali_{year}",
        kind="choropleth",
        path=f"{LIBRARIES_DIR}/Datasets_MibactLibraries/Biblio_Mibact_Statali_Ministero_{year}.json",
        description=f"State libraries per region, {year}.",
        base_geometry="data/baseGeoJson.geojson",
        join_key="id",
    )


def get_province_libraries_spec(year: int) -> SourceSpec:
    """Choropleth of state libraries per province for one year."""
    return SourceSpec(
        name=f"biblioteche_province_{year}",
        kind="json_table",
        path=f"{LIBRARIES_DIR}/Json_Biblioteche_Mibact/df_tav_1_prestiti__{year}.json",
        description=f"State libraries, consultations and loans per province, {year}.",
        table_key=PROVINCE_TABLE_KEY.format(year=year),
        value_column="Column3",
        base_geometry="geojson/georef-italy-provincia.geojson",
        join_key="name",
    )
