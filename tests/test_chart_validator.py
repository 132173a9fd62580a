from __future__ import annotations

import pytest

from services.chart_validator import (
    check_data_point_limit,
    count_data_points,
    validate_chart_config,
)


def test_valid_line_config() -> None:
    config = {"series": [{"type": "line", "data": [120, 130, 150]}]}

    result = validate_chart_config(config)

    assert result.is_valid
    assert result.errors == []
    assert count_data_points(config) == 3


@pytest.mark.parametrize("raw", [None, 42, "series", [1, 2], True, 1.5])
def test_non_object_fails_with_single_error(raw) -> None:
    result = validate_chart_config(raw)

    assert not result.is_valid
    assert result.errors == ["Configuration must be an object"]


def test_missing_or_non_list_series() -> None:
    assert validate_chart_config({}).errors == ["Configuration must contain a series array"]
    assert validate_chart_config({"series": {"type": "bar"}}).errors == [
        "Configuration must contain a series array"
    ]


def test_empty_series() -> None:
    result = validate_chart_config({"series": []})

    assert not result.is_valid
    assert "Series array cannot be empty" in result.errors


def test_errors_accumulate_in_index_order() -> None:
    config = {
        "series": [
            "not-a-series",
            {"type": "radar", "data": [1]},
            {"type": "bar"},
            {"type": "pie", "data": []},
            {"data": "oops"},
            {"type": "line", "data": [1, 2]},
        ]
    }

    result = validate_chart_config(config)

    assert result.errors == [
        "Series at index 0 must be an object",
        "Series at index 1 has invalid type: radar",
        "Series at index 2 must contain a data array",
        "Series at index 3 has empty data array",
        "Series at index 4 has invalid type: None",
        "Series at index 4 must contain a data array",
    ]
    assert result.to_dict() == {"isValid": False, "errors": result.errors}


def test_area_type_is_allowed() -> None:
    assert validate_chart_config({"series": [{"type": "area", "data": [1]}]}).is_valid


def test_bound_check_rejects_too_many_points() -> None:
    config = {"series": [{"type": "bar", "data": [0] * 1200}]}

    result = check_data_point_limit(config, max_points=1000)

    assert not result.is_valid
    assert len(result.errors) == 1
    assert "1200" in result.errors[0]
    assert "1000" in result.errors[0]


def test_bound_check_is_inclusive_at_limit() -> None:
    config = {"series": [{"type": "bar", "data": [0] * 600}, {"type": "line", "data": [0] * 400}]}

    assert count_data_points(config) == 1000
    assert check_data_point_limit(config).is_valid
    config["series"][1]["data"].append(1)
    assert not check_data_point_limit(config).is_valid


def test_count_data_points_tolerates_malformed_config() -> None:
    assert count_data_points({}) == 0
    assert count_data_points({"series": "x"}) == 0
    assert count_data_points({"series": [{"data": "abc"}, None, {"data": [1, 2]}]}) == 2
