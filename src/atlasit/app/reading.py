"""
AtlasIT - Application Layer for Reading Habits.
"""
from typing import Dict, Optional

import pandas as pd

from atlasit.app.session import VizSession, fetch_source
from atlasit.core.catalog.sources import get_source_spec
from atlasit.core.logic.series import frame_datasets
from atlasit.core.logic.tables import parse_header_table
from atlasit.settings import logger

# Region column plus the five reading-frequency columns
MIN_READING_COLUMNS = 5


def load_reading_habits(
    source: str = "lettura_regioni_2021",
    *,
    data_root: Optional[str] = None,
    session: Optional[VizSession] = None,
    control: str = "reading",
) -> pd.DataFrame:
    """Loads the reading-habits table: one row per region, one column per answer."""
    spec = get_source_spec(source)
    ticket = session.begin(control, source) if session else None

    text = fetch_source(spec.path, session=session, data_root=data_root)
    df = parse_header_table(text, delimiter=spec.delimiter, decimal=spec.decimal)

    if df.shape[1] < MIN_READING_COLUMNS:
        logger.warning(
            f"    ⚠️ {source} has {df.shape[1]} value columns, "
            f"expected at least {MIN_READING_COLUMNS}."
        )

    if ticket is not None:
        session.commit(ticket, df)

    logger.info(f"✅ Loaded {len(df)} regions from {source}.")
    return df


def reading_chart_data(df: pd.DataFrame) -> Dict:
    """Line-chart input: regions on x, one dataset per answer column."""
    return frame_datasets(df)
