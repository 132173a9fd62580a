"""
Chart Specification Validator.

Validates LLM-produced ECharts configurations before they reach the renderer:
- Configuration is an object with a non-empty series array
- Every series has an allowed type and a non-empty data array
- Total data points stay within the configured ceiling

CORE PRINCIPLE: Report every structural problem in one pass. Never raise.
"""

from typing import Dict, Any, List, Optional


# Validation limits
MAX_DATA_POINTS = 1000
ALLOWED_CHART_TYPES = ["line", "bar", "pie", "scatter", "area"]


class ValidationResult:
    """Result of chart config validation."""

    def __init__(self, errors: Optional[List[str]] = None):
        self.errors = list(errors or [])

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {"isValid": self.is_valid, "errors": list(self.errors)}


def validate_chart_config(config: Any) -> ValidationResult:
    """
    Validate an untyped ECharts configuration.

    Checks:
    1. Config is an object
    2. Series is present, is an array, and is not empty
    3. Each series is an object with an allowed type
    4. Each series carries a non-empty data array
    """
    if not isinstance(config, dict):
        return ValidationResult(["Configuration must be an object"])

    errors: List[str] = []
    series_list = config.get("series")

    if not isinstance(series_list, list):
        errors.append("Configuration must contain a series array")
    elif not series_list:
        errors.append("Series array cannot be empty")
    else:
        for index, series in enumerate(series_list):
            if not isinstance(series, dict):
                errors.append(f"Series at index {index} must be an object")
                continue

            series_type = series.get("type")
            if not isinstance(series_type, str) or series_type not in ALLOWED_CHART_TYPES:
                errors.append(f"Series at index {index} has invalid type: {series_type}")

            data = series.get("data")
            if not isinstance(data, list):
                errors.append(f"Series at index {index} must contain a data array")
            elif not data:
                errors.append(f"Series at index {index} has empty data array")

    return ValidationResult(errors)


def count_data_points(config: Dict[str, Any]) -> int:
    """
    Count data points across all series.

    Expects a config that already passed validate_chart_config. Anything
    malformed (missing series, non-list data) contributes zero points.
    """
    if not isinstance(config, dict):
        return 0
    series_list = config.get("series")
    if not isinstance(series_list, list):
        return 0

    total = 0
    for series in series_list:
        if isinstance(series, dict) and isinstance(series.get("data"), list):
            total += len(series["data"])
    return total


def check_data_point_limit(
    config: Dict[str, Any],
    max_points: int = MAX_DATA_POINTS
) -> ValidationResult:
    """Reject configs whose total data point count exceeds max_points."""
    total_points = count_data_points(config)

    if total_points > max_points:
        return ValidationResult(
            [f"Total data points ({total_points}) exceeds limit of {max_points}"]
        )

    return ValidationResult()
