from .extractor import DelimitedRecordExtractor, ParsedDataset, extract_records, parse_number
from .colors import ColorRamp, interpolate_color, label_colors, series_color

__all__ = [
    "DelimitedRecordExtractor",
    "ParsedDataset",
    "extract_records",
    "parse_number",
    "ColorRamp",
    "interpolate_color",
    "label_colors",
    "series_color",
]
