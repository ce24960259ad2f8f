"""
AtlasIT - Application Layer for Cultural Events.
"""
from typing import Optional

import pandas as pd

from atlasit.app.session import VizSession, fetch_source
from atlasit.core.catalog.sources import get_source_spec
from atlasit.core.logic.tables import parse_key_value_lines, top_n
from atlasit.settings import logger


def load_top_event_cities(
    n: int = 20,
    *,
    source: str = "eventi_citta_2023",
    data_root: Optional[str] = None,
    session: Optional[VizSession] = None,
    control: str = "events",
) -> pd.DataFrame:
    """The ``n`` cities with the most events, descending."""
    spec = get_source_spec(source)
    ticket = session.begin(control, source) if session else None

    text = fetch_source(spec.path, session=session, data_root=data_root)
    df = top_n(parse_key_value_lines(text, decimal=spec.decimal), n=n)

    if ticket is not None:
        session.commit(ticket, df)

    logger.info(f"✅ Loaded top {len(df)} cities from {source}.")
    return df
