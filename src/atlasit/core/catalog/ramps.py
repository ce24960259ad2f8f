"""
AtlasIT - Core Catalog for Color Tables.

Threshold tables and fixed palettes used by the library maps and charts.
"""
from typing import Dict, List, Tuple

# Stops are (threshold, color), ascending. The ladders compare with a
# strict ">" so they are used with inclusive=False.

# State libraries per region (choropleth by year)
STATE_LIBRARY_STOPS: List[Tuple[float, str]] = [
    (0, "#FFEDA0"),
    (1000, "#FED976"),
    (2000, "#FEB24C"),
    (5000, "#FD8D3C"),
    (10000, "#FC4E2A"),
    (20000, "#E31A1C"),
    (50000, "#BD0026"),
    (100000, "#800026"),
]

# Libraries per province
PROVINCE_LIBRARY_STOPS: List[Tuple[float, str]] = [
    (0, "#FFEDA0"),
    (2000, "#FEB24C"),
    (5000, "#FD8D3C"),
    (10000, "#FC4E2A"),
    (20000, "#E31A1C"),
    (50000, "#BD0026"),
    (100000, "#800026"),
]

# Library size bands (pie chart), fixed per label
VOLUME_BAND_LABELS: Tuple[str, ...] = (
    "Non indicato",
    "Fino a 2.000 volumi",
    "Da 2.001 a 5.000",
    "Da 5.001 a 10.000",
    "Da 10.001 a 100.000",
    "Da 100.001 a 500.000",
    "Da 500.001 a 1.000.000",
    "Oltre 1.000.000 di volumi",
)

VOLUME_BAND_COLORS: Dict[str, str] = {
    "Non indicato": "#c6dbef",
    "Fino a 2.000 volumi": "#9ecae1",
    "Da 2.001 a 5.000": "#6baed6",
    "Da 5.001 a 10.000": "#4292c6",
    "Da 10.001 a 100.000": "#2171b5",
    "Da 100.001 a 500.000": "#08519c",
    "Da 500.001 a 1.000.000": "#08519c",
    "Oltre 1.000.000 di volumi": "#08519c",
}
DEFAULT_LABEL_COLOR = "#c6dbef"

# Multi-series line charts: translucent fill + opaque border, cycled
SERIES_FILL: Tuple[str, ...] = (
    "rgba(255, 99, 132, 0.2)",
    "rgba(54, 162, 235, 0.2)",
    "rgba(255, 206, 86, 0.2)",
    "rgba(75, 192, 192, 0.2)",
    "rgba(153, 102, 255, 0.2)",
    "rgba(255, 159, 64, 0.2)",
)
SERIES_BORDER: Tuple[str, ...] = (
    "rgba(255, 99, 132, 1)",
    "rgba(54, 162, 235, 1)",
    "rgba(255, 206, 86, 1)",
    "rgba(75, 192, 192, 1)",
    "rgba(153, 102, 255, 1)",
    "rgba(255, 159, 64, 1)",
)

# Point-map marker: midpoint of the blue palette
MARKER_DARK = "#08306b"
MARKER_LIGHT = "#c6dbef"
