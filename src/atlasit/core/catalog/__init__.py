"""
AtlasIT - Core Catalog Package.

Exposes the configuration records for sources, whitelists and color tables.
"""

from .sources import (
    SOURCE_CATALOG,
    PointSchema,
    SourceSpec,
    get_source_spec,
    get_general_info_spec,
    get_state_libraries_spec,
    get_province_libraries_spec,
    list_sources,
)
from .whitelists import ITALY_WHITELISTS, Whitelists, get_whitelists

__all__ = [
    "SOURCE_CATALOG",
    "PointSchema",
    "SourceSpec",
    "get_source_spec",
    "get_general_info_spec",
    "get_state_libraries_spec",
    "get_province_libraries_spec",
    "list_sources",
    "ITALY_WHITELISTS",
    "Whitelists",
    "get_whitelists",
]
