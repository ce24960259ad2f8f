"""
AtlasIT - Core Catalog for Category Whitelists.

The four whitelists route a parsed row into its output group. Strings are
kept byte-exact to the published ISTAT tables, including accents and the
bilingual Aosta Valley name.
"""

import unicodedata
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from atlasit.core.types import GROUP_ORDER

# --- Default Lists ---

REGIONS: Tuple[str, ...] = (
    "Piemonte",
    "Valle d'Aosta - Vallée d'Aoste",
    "Lombardia",
    "Trentino-Alto Adige",
    "Veneto",
    "Friuli-Venezia Giulia",
    "Liguria",
    "Emilia-Romagna",
    "Toscana",
    "Umbria",
    "Marche",
    "Lazio",
    "Abruzzo",
    "Molise",
    "Campania",
    "Puglia",
    "Basilicata",
    "Calabria",
    "Sicilia",
    "Sardegna",
)

GEOGRAPHICAL_AREAS: Tuple[str, ...] = (
    "Nord-ovest",
    "Nord-est",
    "Centro",
    "Sud",
    "Isole",
)

# Ordered from smallest to largest municipality
POPULATION_RANGES: Tuple[str, ...] = (
    "Fino a 2.000 abitanti",
    "Da 2.001 a 5.000 abitanti",
    "Da 5.001 a 10.000 abitanti",
    "Da 10.001 a 30.000 abitanti",
    "Da 30.001 a 50.000 abitanti",
    "Più di 50.000 abitanti",
)

CLASSIFICATION_TIERS: Tuple[str, ...] = (
    "Città metropolitane",
    "Comune Polo",
    "Polo intercomunale",
    "Comune cintura",
    "Comune intermedio",
    "Comune periferico",
    "Comune ultra-periferico",
    "Città o zone densamente popolate",
    "Piccole città e sobborghi a densità intermedia di popolazione",
    "Zone rurali o scarsamente popolate",
)

# Typographic apostrophes folded to "'" when canonicalization is enabled
_APOSTROPHES = {"\u2019": "'", "\u2018": "'", "\u02bc": "'"}


def canonicalize(text: str) -> str:
    """NFC-normalizes text and folds typographic apostrophes to ASCII."""
    s = unicodedata.normalize("NFC", text)
    for src, dst in _APOSTROPHES.items():
        s = s.replace(src, dst)
    return s


# --- Domain Model ---

class Whitelists(BaseModel):
    """
    Routing configuration for the extractor.

    Matching is exact and case-sensitive unless ``canonicalize`` is set, in
    which case both sides are compared after :func:`canonicalize` and the
    whitelist spelling is used as the output key.
    """
    model_config = ConfigDict(frozen=True)

    regions: Tuple[str, ...] = ()
    geographical: Tuple[str, ...] = ()
    population: Tuple[str, ...] = ()
    classification: Tuple[str, ...] = ()
    canonicalize: bool = False

    def route(self, category: str) -> Optional[Tuple[str, str]]:
        """
        Returns (group, key) for the first whitelist containing the category,
        in regions -> geographical -> population -> classification order.
        """
        needle = canonicalize(category) if self.canonicalize else category
        for group in GROUP_ORDER:
            for entry in getattr(self, group):
                candidate = canonicalize(entry) if self.canonicalize else entry
                if candidate == needle:
                    return group, entry
        return None


ITALY_WHITELISTS = Whitelists(
    regions=REGIONS,
    geographical=GEOGRAPHICAL_AREAS,
    population=POPULATION_RANGES,
    classification=CLASSIFICATION_TIERS,
)


def get_whitelists(canonicalize: bool = False) -> Whitelists:
    """Default Italian whitelists, optionally with apostrophe folding."""
    if canonicalize:
        return ITALY_WHITELISTS.model_copy(update={"canonicalize": True})
    return ITALY_WHITELISTS
