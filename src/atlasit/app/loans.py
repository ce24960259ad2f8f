"""
AtlasIT - Application Layer for Library Loans.

Fetches a "category, value" loans table and splits it into the four
chart groups (regions, geographical areas, population ranges,
classification tiers).
"""
from typing import Optional

from atlasit.app.session import VizSession, fetch_source
from atlasit.core.catalog.sources import get_source_spec
from atlasit.core.catalog.whitelists import Whitelists, get_whitelists
from atlasit.core.logic.extractor import DelimitedRecordExtractor, ParsedDataset
from atlasit.core.logic.series import ChartSeries, dataset_series
from atlasit.core.types import GROUP_ORDER
from atlasit.settings import logger

LOANS_LABEL = "Number of Loans"


def load_loans(
    source: str = "prestiti_regioni_2022",
    *,
    whitelists: Optional[Whitelists] = None,
    data_root: Optional[str] = None,
    session: Optional[VizSession] = None,
    control: str = "loans",
) -> ParsedDataset:
    """
    Loads a loans table as a ParsedDataset.

    Args:
        source: Catalog name of a 'delimited' source.
        whitelists: Routing lists; defaults to the Italian whitelists.
        data_root: Overrides the configured data root.
        session: When given, the fetch is cached and the result committed
                 under ``control`` unless a newer load superseded it.
    """
    spec = get_source_spec(source)
    if spec.kind != "delimited":
        raise ValueError(f"Source '{source}' is a {spec.kind} source, not a delimited table.")

    ticket = session.begin(control, source) if session else None

    text = fetch_source(spec.path, session=session, data_root=data_root)
    extractor = DelimitedRecordExtractor.from_spec(spec, whitelists or get_whitelists())
    dataset = extractor.parse(text)

    for group in GROUP_ORDER:
        if not getattr(dataset, group):
            logger.warning(f"    ⚠️ No '{group}' rows found in {source}.")
    if dataset.defaulted:
        logger.warning(f"    ⚠️ Non-numeric values set to 0 for: {list(dataset.defaulted)}")

    if ticket is not None:
        session.commit(ticket, dataset)

    logger.info(f"✅ Loaded {source} ({dataset.skipped_lines} lines skipped).")
    return dataset


def loans_series(dataset: ParsedDataset, group: str = "regions") -> ChartSeries:
    """Bar-chart input for one group of a loans dataset."""
    return dataset_series(dataset, group, label=LOANS_LABEL)
