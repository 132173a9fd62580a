"""
Chart Generation API Router.

POST /api/generate-chart turns a natural language prompt into an ECharts
configuration. Errors are returned as {success: false, error, message}
envelopes with 400 (caller problem) or 500 (server/LLM problem).
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from services.chart_generation import ChartGenerator

router = APIRouter(prefix="/api/generate-chart", tags=["charts"])

# Error kind -> HTTP status
ERROR_STATUS_CODES: Dict[str, int] = {
    "invalid_request": 400,
    "no_data": 400,
    "validation_failed": 400,
    "server_error": 500,
}


def get_chart_generator(request: Request) -> ChartGenerator:
    """Chart generator built at startup (see main.create_app)."""
    return request.app.state.chart_generator


@router.post("")
async def generate_chart(
    request: Request,
    generator: ChartGenerator = Depends(get_chart_generator),
) -> JSONResponse:
    """
    Generate a chart configuration.

    Body: {"prompt": "...", "sessionId": "..."}. sessionId is accepted for
    client-side tracking only; the service keeps no state between requests.
    A body that is not a JSON object is treated as a missing prompt.
    """
    try:
        body = await request.json()
    except ValueError:
        body = None
    prompt = body.get("prompt") if isinstance(body, dict) else None

    # The LLM call blocks, keep it off the event loop
    result = await run_in_threadpool(generator.generate, prompt)

    if result.success:
        return JSONResponse(status_code=200, content=result.model_dump())

    return JSONResponse(
        status_code=ERROR_STATUS_CODES.get(result.error, 500),
        content=result.model_dump(exclude_none=True),
    )


@router.get("")
async def describe_endpoint() -> Dict[str, Any]:
    """Usage documentation for the endpoint."""
    return {
        "message": "AI Charts API - Generate Chart Endpoint",
        "method": "POST",
        "endpoint": "/api/generate-chart",
        "documentation": "Send a POST request with { prompt: string, sessionId?: string }",
        "example": {
            "prompt": "比较北京和上海的销售额：北京是120、130、150，上海是100、140、160"
        },
    }
