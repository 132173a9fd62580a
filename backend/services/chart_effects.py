"""
Pseudo-3D Chart Effects.

Rewrites per-series styling so bar and pie charts read as 3D on a flat
canvas: gradients and shadows for bars, thickness shadows and outside
labels for pies.

CORE PRINCIPLE: Pure transforms that always succeed. Malformed inputs fall
back to safe defaults, and series of other types pass through unchanged.
"""

import copy
import re
from typing import Any, Dict, List, Optional

from models.chart import ChartType


DEFAULT_BAR_COLOR = "#5470c6"
DEFAULT_PIE_RADIUS = 50.0
PIE_THICKNESS_RATIO = 0.15

HEX_COLOR_PATTERN = re.compile(r"^#([0-9a-fA-F]{6})$")
PERCENT_PATTERN = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*%?\s*$")

BAR_GRID_3D: Dict[str, Any] = {
    "left": "5%",
    "right": "5%",
    "bottom": "5%",
    "top": "15%",
    "containLabel": True,
}


def _clamp_channel(value: int) -> int:
    return max(0, min(255, value))


def adjust_color_brightness(color: Any, percent: float) -> Any:
    """
    Lighten (positive percent) or darken (negative percent) a #rrggbb color.

    Other color formats (named colors, rgb(), gradient objects) are
    returned unchanged.
    """
    if not isinstance(color, str):
        return color
    match = HEX_COLOR_PATTERN.match(color.strip())
    if not match:
        return color

    value = int(match.group(1), 16)
    shift = int(round(255 * percent / 100))
    r = _clamp_channel((value >> 16) + shift)
    g = _clamp_channel(((value >> 8) & 0xFF) + shift)
    b = _clamp_channel((value & 0xFF) + shift)
    return f"#{r:02x}{g:02x}{b:02x}"


def parse_radius(radius: Any, default: float = DEFAULT_PIE_RADIUS) -> float:
    """
    Read the outer radius of a pie series as a number.

    Accepts 50, "50%", or an [inner, outer] pair (the outer one is used).
    """
    if isinstance(radius, list):
        if len(radius) != 2:
            return default
        radius = radius[1]

    if isinstance(radius, bool):
        return default
    if isinstance(radius, (int, float)):
        return float(radius)
    if isinstance(radius, str):
        match = PERCENT_PATTERN.match(radius)
        if match:
            return float(match.group(1))
    return default


def _bar_item_style(color: Any) -> Dict[str, Any]:
    return {
        "color": {
            "type": "linear",
            "x": 0,
            "y": 0,
            "x2": 0,
            "y2": 1,
            "colorStops": [
                {"offset": 0, "color": color},
                {"offset": 1, "color": adjust_color_brightness(color, -20)},
            ],
        },
        "borderColor": color,
        "borderWidth": 1,
        "shadowBlur": 10,
        "shadowOffsetX": 3,
        "shadowOffsetY": 3,
        "shadowColor": "rgba(0, 0, 0, 0.3)",
    }


def _series_color(series: Dict[str, Any]) -> Any:
    item_style = series.get("itemStyle")
    if isinstance(item_style, dict) and item_style.get("color"):
        return item_style["color"]
    return DEFAULT_BAR_COLOR


def apply_3d_bar(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Give bar series a pseudo-3D look.

    Each bar series gets a top-to-bottom gradient ending 20% darker, a thin
    border in its own color, and a drop shadow that deepens on hover. The
    grid margins widen so shadows are not clipped.
    """
    result = copy.deepcopy(config)
    series_list = result.get("series")
    if not isinstance(series_list, list):
        return result

    styled: List[Any] = []
    for series in series_list:
        if not isinstance(series, dict) or series.get("type") != "bar":
            styled.append(series)
            continue

        color = _series_color(series)
        emphasis = series.get("emphasis")
        emphasis = dict(emphasis) if isinstance(emphasis, dict) else {}
        emphasis["itemStyle"] = {
            "shadowBlur": 20,
            "shadowOffsetX": 5,
            "shadowOffsetY": 5,
            "shadowColor": "rgba(0, 0, 0, 0.5)",
        }

        styled.append({
            **series,
            "itemStyle": _bar_item_style(color),
            "emphasis": emphasis,
            "barWidth": "60%",
            "barGap": "20%",
        })

    result["series"] = styled

    grid = result.get("grid")
    result["grid"] = {**grid, **BAR_GRID_3D} if isinstance(grid, dict) else dict(BAR_GRID_3D)
    return result


def apply_3d_pie(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Give pie series a pseudo-3D look.

    The shadow's vertical offset stands in for the pie's thickness
    (15% of the outer radius), the center moves up to suggest a tilt, and
    labels move outside the edge.
    """
    result = copy.deepcopy(config)
    series_list = result.get("series")
    if not isinstance(series_list, list):
        return result

    styled: List[Any] = []
    for series in series_list:
        if not isinstance(series, dict) or series.get("type") != "pie":
            styled.append(series)
            continue

        radius = series.get("radius")
        thickness = parse_radius(radius) * PIE_THICKNESS_RATIO
        if not (isinstance(radius, list) and len(radius) == 2):
            radius = ["0%", "50%"]

        item_style = series.get("itemStyle")
        item_style = dict(item_style) if isinstance(item_style, dict) else {}
        item_style.update({
            "borderColor": "#fff",
            "borderWidth": 2,
            "shadowBlur": 10,
            "shadowOffsetX": 0,
            "shadowOffsetY": thickness,
            "shadowColor": "rgba(0, 0, 0, 0.3)",
        })

        styled.append({
            **series,
            "radius": radius,
            "center": series.get("center") or ["50%", "45%"],
            "itemStyle": item_style,
            "emphasis": {
                "itemStyle": {
                    "shadowBlur": 20,
                    "shadowOffsetX": 0,
                    "shadowOffsetY": thickness * 1.5,
                    "shadowColor": "rgba(0, 0, 0, 0.5)",
                },
                "label": {
                    "show": True,
                    "fontSize": 16,
                    "fontWeight": "bold",
                },
            },
            "label": {
                "show": True,
                "position": "outside",
            },
            "labelLine": {
                "show": True,
                "length": 15,
                "length2": 10,
                "smooth": True,
            },
        })

    result["series"] = styled
    return result


def apply_visual_mode(config: Dict[str, Any], chart_type: Optional[ChartType]) -> Dict[str, Any]:
    """Apply the 3D transform matching the chart category."""
    if chart_type == ChartType.BAR:
        return apply_3d_bar(config)
    if chart_type == ChartType.PIE:
        return apply_3d_pie(config)
    return config
