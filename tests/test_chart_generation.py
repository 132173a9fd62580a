from __future__ import annotations

from datetime import datetime

import pytest

from conftest import StubLLM
from models.chart import ChartSpecification
from services.chart_generation import ChartGenerator, generate_chart, parse_llm_response, ChartGenerationError
from services.chart_prompts import get_chart_generation_prompt
from services.groq_client import LLMEmptyResponseError, LLMError
from services.settings import ChartSettings


def test_bar_prompt_end_to_end(settings, bar_config) -> None:
    llm = StubLLM(bar_config)

    result = generate_chart("用柱状图展示：1月100，2月150，3月200", settings, llm)

    assert result.success
    assert result.metadata.chartType == "bar"
    assert result.metadata.dataPointCount == 3
    assert result.metadata.seriesCount == 1
    assert result.metadata.wasTruncated is False
    assert result.metadata.visualMode == "2D"
    assert result.metadata.visualEffect is None
    datetime.fromisoformat(result.metadata.generatedAt)
    assert result.config["animation"] is True
    assert result.config["grid"]["containLabel"] is True
    assert result.config["series"] == bar_config["series"]
    assert result.config["xAxis"] == bar_config["xAxis"]


def test_llm_receives_system_prompt_and_trimmed_prompt(settings, bar_config) -> None:
    llm = StubLLM(bar_config)

    generate_chart("  柱状图 1月100  ", settings, llm)

    system_prompt, user_prompt, options = llm.calls[0]
    assert system_prompt == get_chart_generation_prompt()
    assert user_prompt == "柱状图 1月100"
    assert options.max_output_tokens == settings.max_tokens
    assert options.temperature == settings.temperature


@pytest.mark.parametrize(
    "prompt, message",
    [
        (None, "Prompt is required and must be a string"),
        (123, "Prompt is required and must be a string"),
        ("", "Prompt is required and must be a string"),
        ("   ", "Prompt cannot be empty"),
        ("x" * 2001, "Prompt exceeds maximum length of 2000 characters"),
    ],
)
def test_invalid_prompts_skip_llm(settings, prompt, message) -> None:
    llm = StubLLM({"series": []})

    result = generate_chart(prompt, settings, llm)

    assert not result.success
    assert result.error == "invalid_request"
    assert result.message == message
    assert llm.calls == []


def test_no_data_sentinel_passes_message(settings) -> None:
    llm = StubLLM({"error": "no_data", "message": "没有数字"})

    result = generate_chart("你好", settings, llm)

    assert result.error == "no_data"
    assert result.message == "没有数字"


def test_no_data_sentinel_default_message(settings) -> None:
    result = generate_chart("你好", settings, StubLLM({"error": "no_data"}))

    assert result.error == "no_data"
    assert result.message == "无法从输入中提取数据，请提供包含数值的描述"


def test_llm_failure_is_server_error_with_details(settings) -> None:
    result = generate_chart("1月100", settings, StubLLM(error=LLMError("Request timed out.")))

    assert result.error == "server_error"
    assert result.message == "Failed to generate chart configuration"
    assert result.details == "Request timed out."


def test_empty_llm_response(settings) -> None:
    result = generate_chart("1月100", settings, StubLLM(error=LLMEmptyResponseError("empty")))

    assert result.error == "server_error"
    assert result.message == "LLM returned empty response"


def test_non_json_output_is_server_error(settings) -> None:
    result = generate_chart("1月100", settings, StubLLM("Sure! Here is your chart: {oops"))

    assert not result.success
    assert result.error == "server_error"
    assert result.details == "Invalid JSON response from LLM"
    assert "Sure!" not in result.model_dump_json()
    assert not hasattr(result, "config")


@pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
def test_non_finite_numbers_are_server_error(settings, constant) -> None:
    reply = '{"series": [{"type": "bar", "data": [1, ' + constant + ']}]}'

    result = generate_chart("1, 2", settings, StubLLM(reply))

    assert not result.success
    assert result.error == "server_error"
    assert result.message == "Failed to parse chart configuration"
    assert result.details == "Invalid JSON response from LLM"


def test_code_fenced_json_is_accepted(settings) -> None:
    reply = '```json\n{"series": [{"type": "line", "data": [1, 2]}]}\n```'

    result = generate_chart("1, 2", settings, StubLLM(reply))

    assert result.success
    assert result.metadata.chartType == "line"


def test_validation_errors_joined(settings) -> None:
    llm = StubLLM({"series": [{"type": "radar", "data": []}]})

    result = generate_chart("1月100", settings, llm)

    assert result.error == "validation_failed"
    assert result.message == "Generated chart configuration is invalid"
    assert result.details == "Series at index 0 has invalid type: radar; Series at index 0 has empty data array"


def test_json_array_fails_validation(settings) -> None:
    result = generate_chart("1月100", settings, StubLLM([1, 2, 3]))

    assert result.error == "validation_failed"
    assert result.details == "Configuration must be an object"


def test_point_ceiling(settings) -> None:
    llm = StubLLM({"series": [{"type": "bar", "data": [0] * 1200}]})

    result = generate_chart("lots of zeros", settings, llm)

    assert result.error == "validation_failed"
    assert "1000" in result.message
    assert "1200" in result.details and "1000" in result.details


def test_point_ceiling_comes_from_settings(bar_config) -> None:
    tight = ChartSettings(max_data_points=2)

    result = generate_chart("bars", tight, StubLLM(bar_config))

    assert result.error == "validation_failed"
    assert result.details == "Total data points (3) exceeds limit of 2"


def test_declared_3d_bar(settings, bar_config) -> None:
    reply = dict(bar_config, visualMode="3D")

    result = generate_chart("柱状图 1月100", settings, StubLLM(reply))

    assert result.metadata.visualMode == "3D"
    assert result.metadata.visualEffect["viewingAngle"] == 30
    assert "visualMode" not in result.config
    series = result.config["series"][0]
    assert series["itemStyle"]["color"]["type"] == "linear"
    assert series["barWidth"] == "60%"
    assert result.config["grid"]["top"] == "15%"


def test_prompt_keyword_3d_pie(settings, pie_config) -> None:
    result = generate_chart("画一个立体饼图：A 335，B 234", settings, StubLLM(pie_config))

    assert result.metadata.chartType == "pie"
    assert result.metadata.visualMode == "3D"
    assert result.metadata.visualEffect["tiltAngle"] == 25
    assert result.config["series"][0]["center"] == ["50%", "45%"]


def test_declared_2d_beats_prompt_keywords(settings, bar_config) -> None:
    reply = dict(bar_config, visualMode="2D")

    result = generate_chart("3D柱状图", settings, StubLLM(reply))

    assert result.metadata.visualMode == "2D"
    assert result.config["series"] == bar_config["series"]


def test_3d_scatter_forced_to_2d(settings) -> None:
    scatter = {"series": [{"type": "scatter", "data": [[1, 2], [3, 4]], "symbolSize": 10}], "visualMode": "3D"}

    result = generate_chart("3D scatter plot", settings, StubLLM(scatter))

    assert result.success
    assert result.metadata.chartType == "scatter"
    assert result.metadata.visualMode == "2D"
    assert result.config["series"] == scatter["series"]
    assert set(result.config) == {"series", "animation", "grid", "tooltip"}


def test_unclassifiable_chart_defaults_to_line(settings) -> None:
    result = generate_chart("area", settings, StubLLM({"series": [{"type": "area", "data": [1, 2]}]}))

    assert result.success
    assert result.metadata.chartType == "line"


def test_area_chart_classified(settings) -> None:
    reply = {
        "series": [
            {"type": "line", "areaStyle": {"opacity": 0.3}, "data": [1, 2]},
            {"type": "line", "data": [3]},
        ]
    }

    result = generate_chart("area", settings, StubLLM(reply))

    assert result.metadata.chartType == "area"
    assert result.metadata.dataPointCount == 3
    assert result.metadata.seriesCount == 2


class ExplodingLLM:
    def complete(self, system_prompt, user_prompt, options):
        raise RuntimeError("boom")


def test_unexpected_errors_caught_at_boundary(settings) -> None:
    result = ChartGenerator(settings, ExplodingLLM()).generate("1月100")

    assert result.error == "server_error"
    assert result.message == "An unexpected error occurred"
    assert result.details == "boom"


def test_parse_llm_response_raises_structured_error() -> None:
    assert parse_llm_response('  {"a": 1} ') == {"a": 1}
    with pytest.raises(ChartGenerationError) as exc_info:
        parse_llm_response("not json")
    assert exc_info.value.kind == "server_error"


def test_series_styling_survives_typed_spec() -> None:
    config = {
        "xAxis": {"type": "category", "data": ["Q1", "Q2"]},
        "series": [
            {
                "name": "Revenue",
                "type": "line",
                "data": [1, 2],
                "itemStyle": {"color": "#5470c6"},
                "areaStyle": {"opacity": 0.3},
                "smooth": True,
            }
        ],
        "visualMode": "3D",
    }

    spec = ChartSpecification.model_validate(config)

    assert spec.visualMode == "3D"
    assert spec.series[0].type == "line"
    assert spec.to_config() == config
