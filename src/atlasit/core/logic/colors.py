"""
AtlasIT - Core Logic for Colors.

Step color ramps for choropleths plus the fixed palettes of the charts.
All functions are pure; the tables themselves live in the catalog.
"""

import math
from bisect import bisect_left, bisect_right
from typing import Dict, Iterable, List, Sequence, Tuple

from atlasit.core.catalog import ramps


class ColorRamp:
    """
    Maps a number to the color of the highest threshold it reaches.

    ``stops`` is an ascending sequence of (threshold, color). With
    ``inclusive=True`` a value reaches a threshold when ``value >= threshold``;
    with ``inclusive=False`` it must be strictly greater, which is how the
    library choropleth ladders were written (``d > 1000 ? ... : lowest``).
    Values below every threshold, and NaN, get the lowest bucket color.
    """

    def __init__(self, stops: Iterable[Tuple[float, str]], *, inclusive: bool = True):
        stops = [(float(t), str(c)) for t, c in stops]
        if not stops:
            raise ValueError("A color ramp needs at least one (threshold, color) stop.")

        thresholds = [t for t, _ in stops]
        if any(b <= a for a, b in zip(thresholds, thresholds[1:])):
            raise ValueError(f"Ramp thresholds must be strictly ascending: {thresholds}")

        self._thresholds = thresholds
        self._colors = [c for _, c in stops]
        self.inclusive = inclusive

    @property
    def stops(self) -> List[Tuple[float, str]]:
        return list(zip(self._thresholds, self._colors))

    @property
    def colors(self) -> List[str]:
        return list(self._colors)

    def bucket(self, value: float) -> int:
        """Index of the stop a value falls into."""
        value = float(value)
        if math.isnan(value):
            return 0
        if self.inclusive:
            idx = bisect_right(self._thresholds, value) - 1
        else:
            idx = bisect_left(self._thresholds, value) - 1
        return max(idx, 0)

    def __call__(self, value: float) -> str:
        return self._colors[self.bucket(value)]

    lookup = __call__

    def __repr__(self) -> str:
        return f"ColorRamp({self.stops!r}, inclusive={self.inclusive})"


def state_library_ramp() -> ColorRamp:
    """Eight-bucket ramp for the state-library choropleth."""
    return ColorRamp(ramps.STATE_LIBRARY_STOPS, inclusive=False)


def province_library_ramp() -> ColorRamp:
    """Seven-bucket ramp for the per-province library map."""
    return ColorRamp(ramps.PROVINCE_LIBRARY_STOPS, inclusive=False)


# --- Palettes ---

def label_colors(
    labels: Sequence[str],
    mapping: Dict[str, str] = None,
    default: str = ramps.DEFAULT_LABEL_COLOR,
) -> List[str]:
    """Fixed color per label, falling back to ``default`` for unknown labels."""
    if mapping is None:
        mapping = ramps.VOLUME_BAND_COLORS
    return [mapping.get(label, default) for label in labels]


def series_color(index: int, border: bool = False) -> str:
    """Cycles through the six-color series palette."""
    palette = ramps.SERIES_BORDER if border else ramps.SERIES_FILL
    return palette[index % len(palette)]


def _hex_channels(color: str) -> List[int]:
    s = color.lstrip("#")
    if len(s) != 6:
        raise ValueError(f"Expected a #rrggbb color, got {color!r}")
    return [int(s[i:i + 2], 16) for i in (0, 2, 4)]


def interpolate_color(color1: str, color2: str, factor: float) -> str:
    """
    Linear interpolation between two #rrggbb colors.
    ``factor`` is clamped to [0, 1]; 0 gives color1, 1 gives color2.
    """
    factor = min(max(factor, 0.0), 1.0)
    a, b = _hex_channels(color1), _hex_channels(color2)
    mixed = [
        int(math.floor(x + factor * (y - x) + 0.5))
        for x, y in zip(a, b)
    ]
    return "#" + "".join(f"{c:02x}" for c in mixed)


def marker_color() -> str:
    """Fill color of the library point markers."""
    return interpolate_color(ramps.MARKER_DARK, ramps.MARKER_LIGHT, 0.5)
