"""
Chart Metadata Builder.

Summarizes a final chart configuration for the response envelope.
NO re-validation - validity is established before this runs.
"""

from typing import Dict, Any, List, Optional

from models.chart import DataSeries, ExtractedData


DEFAULT_SERIES_NAME = "Series"


def _coerce_value(point: Any) -> Any:
    """Reduce a data point to its numeric value."""
    if isinstance(point, (int, float)) and not isinstance(point, bool):
        return point
    if isinstance(point, dict) and "value" in point:
        return point["value"]
    return 0


def create_extracted_data(config: Dict[str, Any]) -> Optional[ExtractedData]:
    """
    Build an ExtractedData summary from a chart config.

    Returns None if the config has no series array.
    """
    if not isinstance(config, dict):
        return None
    series_list = config.get("series")
    if not isinstance(series_list, list):
        return None

    series: List[DataSeries] = []
    for item in series_list:
        item = item if isinstance(item, dict) else {}
        data = item.get("data")
        item_style = item.get("itemStyle")

        series.append(DataSeries(
            name=item.get("name") or DEFAULT_SERIES_NAME,
            values=[_coerce_value(p) for p in data] if isinstance(data, list) else [],
            color=item_style.get("color") if isinstance(item_style, dict) else None,
        ))

    total_points = sum(len(s.values) for s in series)

    x_axis = config.get("xAxis")
    labels = None
    if isinstance(x_axis, dict) and isinstance(x_axis.get("data"), list):
        labels = x_axis["data"]

    return ExtractedData(
        series=series,
        total_points=total_points,
        labels=labels,
    )
