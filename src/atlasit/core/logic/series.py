"""
AtlasIT - Chart input shapes.

Charting libraries take parallel label/value arrays; these helpers build
them from the parsed structures.
"""
from typing import Dict, List, Mapping, Union

import pandas as pd
from pydantic import BaseModel, ConfigDict

from atlasit.core.logic.colors import series_color

Number = Union[int, float]


class ChartSeries(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str = ""
    labels: List[str]
    values: List[Number]

    def to_dict(self) -> Dict:
        return {"label": self.label, "labels": list(self.labels), "values": list(self.values)}


def mapping_series(data: Mapping[str, Number], label: str = "") -> ChartSeries:
    """Labels in first-appearance order with their values."""
    return ChartSeries(label=label, labels=list(data.keys()), values=list(data.values()))


def dataset_series(dataset, group: str, label: str = "") -> ChartSeries:
    """One group of a ParsedDataset as a chart series."""
    return mapping_series(dataset.group(group), label=label)


def frame_datasets(df: pd.DataFrame) -> Dict:
    """
    Multi-series shape for a wide table: the index becomes the x labels and
    each column one dataset with its palette colors.
    """
    datasets = []
    for i, column in enumerate(df.columns):
        datasets.append({
            "label": str(column),
            "data": [float(v) for v in df[column].tolist()],
            "backgroundColor": series_color(i),
            "borderColor": series_color(i, border=True),
        })
    return {"labels": [str(x) for x in df.index.tolist()], "datasets": datasets}
