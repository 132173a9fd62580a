"""Pydantic models for API request/response schemas."""

from typing import Any, Dict, Literal, Optional
from pydantic import BaseModel, Field


# === Error Kinds ===

ErrorKind = Literal[
    "invalid_request",   # Malformed request, no LLM call made
    "no_data",           # LLM found nothing numeric in the prompt
    "validation_failed", # LLM output failed structural or bound checks
    "server_error",      # LLM failure, unparseable output, or unexpected fault
]


# === Success Response ===

class ChartMetadata(BaseModel):
    """Summary of the generated chart."""
    chartType: str
    dataPointCount: int
    seriesCount: int
    wasTruncated: bool = False
    generatedAt: str
    visualMode: Literal["2D", "3D"] = "2D"
    visualEffect: Optional[Dict[str, Any]] = None


class ChartSuccessResponse(BaseModel):
    """Successful chart generation."""
    success: Literal[True] = True
    config: Dict[str, Any]
    metadata: ChartMetadata


# === Error Response ===

class ChartErrorResponse(BaseModel):
    """Standard error response."""
    success: Literal[False] = False
    error: ErrorKind
    message: str
    details: Optional[str] = Field(default=None)
