"""
AtlasIT - Shared Domain Types.
"""
from typing import Literal, Tuple

# Field separator of a delimited source file
Delimiter = Literal[",", ";"]

# Decimal convention of a source:
# - "dot":   1,234.5  (comma groups thousands)
# - "comma": 1.234,5  (dot groups thousands)
DecimalConvention = Literal["dot", "comma"]

# The four output partitions, in routing priority order
GroupName = Literal["regions", "geographical", "population", "classification"]
GROUP_ORDER: Tuple[str, ...] = ("regions", "geographical", "population", "classification")

# Shapes a source file can have
SourceKind = Literal["delimited", "header_table", "json_table", "key_value", "points", "choropleth"]

SUPPORTED_DELIMITERS: Tuple[str, ...] = (",", ";")
SUPPORTED_DECIMALS: Tuple[str, ...] = ("dot", "comma")
