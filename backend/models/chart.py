"""
Chart Specification Types.

Typed view of an ECharts option object produced by the LLM.

CORE PRINCIPLE: The LLM payload is an untyped JSON tree until the validator
accepts it. Only then is it lifted into ChartSpecification.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


# === Type Definitions ===

class ChartType(str, Enum):
    """Supported chart categories."""
    LINE = "line"
    BAR = "bar"
    PIE = "pie"
    SCATTER = "scatter"
    AREA = "area"


SeriesType = Literal["line", "bar", "pie", "scatter", "area"]
VisualMode = Literal["2D", "3D"]


# === Validated Specification ===

class Series(BaseModel):
    """One renderable data trace. Styling and labels stay in the extras."""
    model_config = ConfigDict(extra="allow")

    type: SeriesType
    data: List[Any] = Field(min_length=1)


class ChartSpecification(BaseModel):
    """
    ECharts option object that passed structural validation.

    Every section other than series is kept as-is in the model extras,
    so to_config() returns exactly what the LLM produced.
    """
    model_config = ConfigDict(extra="allow")

    series: List[Series] = Field(min_length=1)
    visualMode: Optional[Any] = None

    def to_config(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


# === Derived Data ===

@dataclass(frozen=True)
class DataSeries:
    """Summary of a single series."""
    name: str
    values: List[Any]
    color: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"name": self.name, "values": list(self.values)}
        if self.color is not None:
            result["color"] = self.color
        return result


@dataclass(frozen=True)
class ExtractedData:
    """Read-only summary of a final chart specification."""
    series: List[DataSeries]
    total_points: int
    labels: Optional[List[Any]] = None
    data_type: str = "numeric"
    is_valid: bool = True

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "series": [s.to_dict() for s in self.series],
            "dataType": self.data_type,
            "totalPoints": self.total_points,
            "isValid": self.is_valid,
        }
        if self.labels is not None:
            result["labels"] = list(self.labels)
        return result


@dataclass(frozen=True)
class VisualEffect3D:
    """Pseudo-3D rendering parameters."""
    viewing_angle: float
    depth: float
    shadow_intensity: float
    tilt_angle: Optional[float] = None
    mode: VisualMode = field(default="3D")

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "mode": self.mode,
            "viewingAngle": self.viewing_angle,
            "depth": self.depth,
            "shadowIntensity": self.shadow_intensity,
        }
        if self.tilt_angle is not None:
            result["tiltAngle"] = self.tilt_angle
        return result
