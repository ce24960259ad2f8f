"""
AtlasIT - Core Logic for Delimited Category Tables.

Pure functions that turn the raw text of a "category, value" statistics
file into a ParsedDataset: four groups (regions, geographical areas,
population ranges, classification tiers) routed by whitelist membership.

Data-shape problems never raise. Bad lines and header lines (unknown
category, non-numeric value) are skipped and counted. Unparseable numbers
become 0 and are flagged; other unknown categories are dropped. Only contract
violations (wrong input type, unsupported delimiter or decimal
convention) raise.
"""

import math
from types import MappingProxyType
from typing import Annotated, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_serializer

from atlasit.core.catalog.whitelists import Whitelists
from atlasit.core.types import GROUP_ORDER, SUPPORTED_DECIMALS, SUPPORTED_DELIMITERS
from atlasit.settings import logger

Number = Union[int, float]

# Groups are read-only views once the dataset is built
Group = Annotated[Mapping[str, Number], AfterValidator(MappingProxyType)]

# Grouping spaces seen in exported tables (plain, no-break, narrow no-break)
_SPACES = (" ", "\u00a0", "\u202f")


# --- Output Model ---

class ParsedDataset(BaseModel):
    """Four category -> value groups plus parse diagnostics."""
    model_config = ConfigDict(frozen=True, validate_default=True)

    regions: Group = Field(default_factory=dict)
    geographical: Group = Field(default_factory=dict)
    population: Group = Field(default_factory=dict)
    classification: Group = Field(default_factory=dict)

    skipped_lines: int = 0
    # Categories whose value failed numeric parsing and was set to 0
    defaulted: Tuple[str, ...] = ()
    # Non-whitelisted categories, in order of appearance
    dropped: Tuple[str, ...] = ()

    @field_serializer("regions", "geographical", "population", "classification")
    def _dump_group(self, group: Mapping[str, Number]) -> Dict[str, Number]:
        return dict(group)

    def group(self, name: str) -> Dict[str, Number]:
        """Returns a copy of one group."""
        if name not in GROUP_ORDER:
            raise ValueError(f"Unknown group '{name}'. Use one of {GROUP_ORDER}.")
        return dict(getattr(self, name))

    def groups(self) -> Dict[str, Dict[str, Number]]:
        return {name: self.group(name) for name in GROUP_ORDER}

    def is_empty(self) -> bool:
        return not any(getattr(self, name) for name in GROUP_ORDER)


# --- Helpers ---

def split_fields(line: str, delimiter: str) -> List[Tuple[str, bool]]:
    """
    Splits one line into (text, was_quoted) fields.

    Delimiters inside double quotes do not split, and a doubled quote
    inside a quoted segment is a literal quote. An unterminated quote runs
    to the end of the line.
    """
    fields: List[Tuple[str, bool]] = []
    buf: List[str] = []
    quoted = False
    in_quotes = False
    i = 0
    n = len(line)

    while i < n:
        ch = line[i]
        if in_quotes:
            if ch == '"':
                if i + 1 < n and line[i + 1] == '"':
                    buf.append('"')
                    i += 2
                    continue
                in_quotes = False
            else:
                buf.append(ch)
        elif ch == '"':
            in_quotes = True
            quoted = True
        elif ch == delimiter:
            fields.append(("".join(buf).strip(), quoted))
            buf = []
            quoted = False
        else:
            buf.append(ch)
        i += 1

    fields.append(("".join(buf).strip(), quoted))
    return fields


def parse_number(raw: str, decimal: str = "dot") -> Optional[Number]:
    """
    Parses a numeric cell under a decimal convention.

    "dot" drops ',' as a thousands separator ("1,234.5" -> 1234.5);
    "comma" drops '.' and reads ',' as the decimal point ("1.234,5").
    Returns None for anything that is not a finite number. Integral values
    come back as int.
    """
    s = raw.strip()
    for space in _SPACES:
        s = s.replace(space, "")

    if decimal == "comma":
        s = s.replace(".", "").replace(",", ".")
    else:
        s = s.replace(",", "")

    try:
        value = float(s)
    except ValueError:
        return None

    if not math.isfinite(value):
        return None
    return int(value) if value.is_integer() else value


def _pick_pair(
    fields: List[Tuple[str, bool]], value_index: int
) -> Optional[Tuple[str, str]]:
    """Selects (category, raw value) from split fields, or None if unusable."""
    if len(fields) < 2:
        return None

    category = fields[0][0]
    if not category:
        return None

    # "name, "quoted value"" shape: first quoted field after the name
    raw = next((text for text, was_quoted in fields[1:] if was_quoted), None)

    if raw is None:
        if value_index >= len(fields):
            return None
        raw = fields[value_index][0].replace('"', "")

    raw = raw.strip()
    if not raw:
        return None
    return category, raw


def _check_contract(text, delimiter: str, decimal: str, value_index: int):
    if not isinstance(text, str):
        raise TypeError(f"text must be str, got {type(text).__name__}")
    if delimiter not in SUPPORTED_DELIMITERS:
        raise ValueError(
            f"Unsupported delimiter {delimiter!r}. Use one of {SUPPORTED_DELIMITERS}."
        )
    if decimal not in SUPPORTED_DECIMALS:
        raise ValueError(
            f"Unsupported decimal convention {decimal!r}. Use one of {SUPPORTED_DECIMALS}."
        )
    if value_index < 1:
        raise ValueError("value_index must point past the category field (>= 1).")


# --- Public API ---

def extract_records(
    text: str,
    delimiter: str,
    whitelists: Whitelists,
    *,
    decimal: str = "dot",
    value_index: int = 1,
) -> ParsedDataset:
    """
    Parses delimited text into a ParsedDataset.

    Args:
        text: Raw file content, lines separated by newlines.
        delimiter: ',' or ';'.
        whitelists: Routing configuration; first match in
            regions -> geographical -> population -> classification wins.
        decimal: 'dot' or 'comma', the source's decimal convention.
        value_index: Field holding the value on unquoted lines.

    Returns:
        A new, frozen ParsedDataset. Empty input gives four empty groups.
    """
    _check_contract(text, delimiter, decimal, value_index)

    groups: Dict[str, Dict[str, Number]] = {name: {} for name in GROUP_ORDER}
    skipped = 0
    defaulted: List[str] = []
    dropped: List[str] = []

    for line in text.splitlines():
        line = line.strip()
        if not line:
            skipped += 1
            continue

        pair = _pick_pair(split_fields(line, delimiter), value_index)
        if pair is None:
            skipped += 1
            continue
        category, raw = pair

        value = parse_number(raw, decimal)

        routed = whitelists.route(category)
        if routed is None:
            # Unknown category with a non-numeric value: title or header line
            if value is None:
                skipped += 1
            else:
                dropped.append(category)
            continue
        group, key = routed

        if value is None:
            value = 0
            defaulted.append(key)
        groups[group][key] = value

    dataset = ParsedDataset(
        **groups,
        skipped_lines=skipped,
        defaulted=tuple(defaulted),
        dropped=tuple(dropped),
    )
    kept = sum(len(g) for g in groups.values())
    logger.debug(
        f"    Parsed {kept} categories "
        f"(skipped={skipped}, defaulted={len(defaulted)}, dropped={len(dropped)})"
    )
    return dataset


class DelimitedRecordExtractor:
    """
    Binds one source's format to the whitelists so the same parsing logic
    serves every "category, value" file.
    """

    def __init__(
        self,
        whitelists: Whitelists,
        *,
        delimiter: str = ",",
        decimal: str = "dot",
        value_index: int = 1,
    ):
        _check_contract("", delimiter, decimal, value_index)
        self.whitelists = whitelists
        self.delimiter = delimiter
        self.decimal = decimal
        self.value_index = value_index

    @classmethod
    def from_spec(cls, spec, whitelists: Whitelists) -> "DelimitedRecordExtractor":
        """Builds an extractor from a catalog SourceSpec."""
        return cls(
            whitelists,
            delimiter=spec.delimiter,
            decimal=spec.decimal,
            value_index=spec.value_index,
        )

    def parse(self, text: str) -> ParsedDataset:
        return extract_records(
            text,
            self.delimiter,
            self.whitelists,
            decimal=self.decimal,
            value_index=self.value_index,
        )
