"""
Chart Type and Visual Mode Mapping.

Maps a chart configuration to a single chart category and decides whether
the pseudo-3D presentation applies.

CORE PRINCIPLE: Deterministic rules only. An unclassifiable config yields
None, which callers treat as a soft default rather than an error.
"""

import re
from typing import Any, Dict, Optional

from models.chart import ChartType, VisualEffect3D, VisualMode


# Series type -> chart category
SERIES_TYPE_MAP: Dict[str, ChartType] = {
    "line": ChartType.LINE,
    "bar": ChartType.BAR,
    "pie": ChartType.PIE,
    "scatter": ChartType.SCATTER,
}

# Categories that have a pseudo-3D rendering, with their effect parameters
VISUAL_EFFECTS_3D: Dict[ChartType, VisualEffect3D] = {
    ChartType.BAR: VisualEffect3D(
        viewing_angle=30,
        depth=20,
        shadow_intensity=0.3,
    ),
    ChartType.PIE: VisualEffect3D(
        viewing_angle=25,
        depth=15,
        shadow_intensity=0.3,
        tilt_angle=25,
    ),
}

# English and Chinese phrasings of a 3D request
THREE_D_PATTERN = re.compile(
    r"(?<![A-Za-z0-9])3-?d(?![A-Za-z0-9])|立体图?|三维|three[\s-]*dimensional",
    re.IGNORECASE,
)


def extract_chart_type(config: Dict[str, Any]) -> Optional[ChartType]:
    """
    Derive the chart category from the first series.

    Multi-series configs are assumed to share one category. A line series
    with a truthy areaStyle is an area chart.
    """
    if not isinstance(config, dict):
        return None
    series_list = config.get("series")
    if not isinstance(series_list, list) or not series_list:
        return None

    first = series_list[0]
    if not isinstance(first, dict):
        return None

    series_type = first.get("type")
    if not isinstance(series_type, str):
        return None

    if series_type == "line" and first.get("areaStyle"):
        return ChartType.AREA

    return SERIES_TYPE_MAP.get(series_type)


def supports_3d(chart_type: Optional[ChartType]) -> bool:
    """Only bar and pie charts have a 3D rendering."""
    return chart_type in VISUAL_EFFECTS_3D


def detect_3d_request(prompt: Optional[str]) -> bool:
    """Check the user's prompt for 3D keywords."""
    if not prompt:
        return False
    return THREE_D_PATTERN.search(prompt) is not None


def resolve_visual_mode(
    declared_mode: Any,
    prompt: Optional[str],
    chart_type: Optional[ChartType]
) -> VisualMode:
    """
    Decide between 2D and 3D rendering.

    Rules:
    - A visualMode declared by the LLM always wins over the prompt keywords
    - Prompt keywords are consulted only when nothing was declared
    - Categories without a 3D rendering are forced back to 2D
    """
    if declared_mode is not None:
        wants_3d = isinstance(declared_mode, str) and declared_mode.strip().upper() == "3D"
    else:
        wants_3d = detect_3d_request(prompt)

    if wants_3d and supports_3d(chart_type):
        return "3D"
    return "2D"


def get_visual_effect(chart_type: Optional[ChartType]) -> Optional[VisualEffect3D]:
    """3D effect parameters for a category, or None if it has no 3D rendering."""
    if chart_type is None:
        return None
    return VISUAL_EFFECTS_3D.get(chart_type)
