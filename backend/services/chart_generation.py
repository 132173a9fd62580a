"""
Chart Generation Pipeline.

FLOW:
1. Prompt checks (no LLM call on bad input)
2. LLM turns the prompt into an ECharts option object
3. Structural validation + data point ceiling
4. Display defaults, chart category, optional pseudo-3D effects
5. Metadata summary

CORE PRINCIPLE: All-or-nothing. Every failure becomes a structured error
response; nothing escapes generate().
"""

import json
import logging
import re
import uuid
from datetime import datetime, timezone
from typing import Any, Optional, Union

from pydantic import ValidationError

from models.chart import ChartSpecification, ChartType
from models.schemas import ChartErrorResponse, ChartMetadata, ChartSuccessResponse, ErrorKind
from services.chart_effects import apply_visual_mode
from services.chart_intent import extract_chart_type, get_visual_effect, resolve_visual_mode
from services.chart_prompts import get_chart_generation_prompt
from services.chart_spec import format_chart_config
from services.chart_validator import check_data_point_limit, count_data_points, validate_chart_config
from services.groq_client import CompletionOptions, LLMCompletion, LLMEmptyResponseError, LLMError
from services.result_metadata import create_extracted_data
from services.settings import ChartSettings

logger = logging.getLogger(__name__)

ChartResponse = Union[ChartSuccessResponse, ChartErrorResponse]

DEFAULT_NO_DATA_MESSAGE = "无法从输入中提取数据，请提供包含数值的描述"
DEFAULT_CHART_TYPE = ChartType.LINE

CODE_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*\n?(.*?)\n?```$", re.DOTALL | re.IGNORECASE)


class ChartGenerationError(Exception):
    """A pipeline stage rejected the request."""

    def __init__(self, kind: ErrorKind, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details

    def to_response(self) -> ChartErrorResponse:
        return ChartErrorResponse(error=self.kind, message=self.message, details=self.details)


def new_request_id() -> str:
    """Short id used to correlate the log lines of one request."""
    return f"req_{uuid.uuid4().hex[:9]}"


def _check_prompt(prompt: Any, max_length: int) -> str:
    """Return the trimmed prompt or raise invalid_request."""
    if not isinstance(prompt, str) or not prompt:
        raise ChartGenerationError("invalid_request", "Prompt is required and must be a string")

    if len(prompt) > max_length:
        raise ChartGenerationError(
            "invalid_request",
            f"Prompt exceeds maximum length of {max_length} characters"
        )

    trimmed = prompt.strip()
    if not trimmed:
        raise ChartGenerationError("invalid_request", "Prompt cannot be empty")
    return trimmed


def _strip_code_fences(content: str) -> str:
    """Remove a markdown code block wrapped around the JSON, if any."""
    text = content.strip()
    match = CODE_FENCE_PATTERN.match(text)
    if match:
        return match.group(1).strip()
    return text


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def parse_llm_response(content: str) -> Any:
    """
    Parse the LLM output as JSON or raise server_error.

    NaN and Infinity are rejected: they are not JSON and cannot be sent back
    to the caller.
    """
    try:
        return json.loads(_strip_code_fences(content), parse_constant=_reject_constant)
    except ValueError:
        raise ChartGenerationError(
            "server_error",
            "Failed to parse chart configuration",
            "Invalid JSON response from LLM"
        )


class ChartGenerator:
    """Runs the prompt -> chart config pipeline against an LLM."""

    def __init__(self, settings: ChartSettings, llm: LLMCompletion):
        self.settings = settings
        self.llm = llm

    def generate(self, prompt: Any) -> ChartResponse:
        """
        Generate a chart configuration from a natural language prompt.

        Returns ChartSuccessResponse, or ChartErrorResponse for every
        failure including unexpected ones.
        """
        request_id = new_request_id()
        logger.info(f"[{request_id}] Chart request received, prompt length: "
                    f"{len(prompt) if isinstance(prompt, str) else 0} chars")

        try:
            response = self._run(request_id, prompt)
        except ChartGenerationError as e:
            if e.kind == "server_error":
                logger.error(f"[{request_id}] {e.message}: {e.details}")
            else:
                logger.warning(f"[{request_id}] Request rejected ({e.kind}): {e.message} {e.details or ''}")
            return e.to_response()
        except Exception as e:
            logger.exception(f"[{request_id}] Unexpected error in chart generation")
            return ChartErrorResponse(
                error="server_error",
                message="An unexpected error occurred",
                details=str(e) or type(e).__name__
            )

        logger.info(
            f"[{request_id}] Chart generated: type={response.metadata.chartType}, "
            f"points={response.metadata.dataPointCount}, series={response.metadata.seriesCount}, "
            f"mode={response.metadata.visualMode}"
        )
        return response

    def _call_llm(self, request_id: str, user_prompt: str) -> str:
        logger.info(f"[{request_id}] Requesting chart config from LLM")
        options = CompletionOptions(
            max_output_tokens=self.settings.max_tokens,
            temperature=self.settings.temperature,
        )
        try:
            return self.llm.complete(get_chart_generation_prompt(), user_prompt, options)
        except LLMEmptyResponseError:
            raise ChartGenerationError("server_error", "LLM returned empty response")
        except LLMError as e:
            raise ChartGenerationError(
                "server_error",
                "Failed to generate chart configuration",
                str(e)
            )

    def _run(self, request_id: str, prompt: Any) -> ChartSuccessResponse:
        user_prompt = _check_prompt(prompt, self.settings.max_prompt_length)

        content = self._call_llm(request_id, user_prompt)
        parsed = parse_llm_response(content)

        if isinstance(parsed, dict) and parsed.get("error") == "no_data":
            message = parsed.get("message")
            raise ChartGenerationError(
                "no_data",
                message if isinstance(message, str) and message else DEFAULT_NO_DATA_MESSAGE
            )

        validation = validate_chart_config(parsed)
        if not validation.is_valid:
            raise ChartGenerationError(
                "validation_failed",
                "Generated chart configuration is invalid",
                "; ".join(validation.errors)
            )

        max_points = self.settings.max_data_points
        limit_check = check_data_point_limit(parsed, max_points)
        if not limit_check.is_valid:
            raise ChartGenerationError(
                "validation_failed",
                f"数据点数量超过限制（最多{max_points}个）",
                "; ".join(limit_check.errors)
            )

        try:
            spec = ChartSpecification.model_validate(parsed)
        except ValidationError as e:
            raise ChartGenerationError(
                "validation_failed",
                "Generated chart configuration is invalid",
                str(e)
            )

        declared_mode = spec.visualMode
        config = spec.to_config()
        config.pop("visualMode", None)

        formatted = format_chart_config(config)
        chart_type = extract_chart_type(formatted)

        visual_mode = resolve_visual_mode(declared_mode, user_prompt, chart_type)
        visual_effect = None
        if visual_mode == "3D":
            formatted = apply_visual_mode(formatted, chart_type)
            visual_effect = get_visual_effect(chart_type)
        elif isinstance(declared_mode, str) and declared_mode.strip().upper() == "3D":
            logger.info(f"[{request_id}] visualMode {declared_mode!r} not applied to {chart_type}")

        extracted = create_extracted_data(formatted)

        return ChartSuccessResponse(
            config=formatted,
            metadata=ChartMetadata(
                chartType=(chart_type or DEFAULT_CHART_TYPE).value,
                dataPointCount=count_data_points(formatted),
                seriesCount=len(extracted.series) if extracted else 0,
                wasTruncated=False,
                generatedAt=datetime.now(timezone.utc).isoformat(),
                visualMode=visual_mode,
                visualEffect=visual_effect.to_dict() if visual_effect else None,
            ),
        )


def generate_chart(prompt: Any, settings: ChartSettings, llm: LLMCompletion) -> ChartResponse:
    """Convenience wrapper around ChartGenerator.generate."""
    return ChartGenerator(settings, llm).generate(prompt)
