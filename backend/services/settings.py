"""
Service configuration.

Settings are read once at process start and passed explicitly into the
chart generation pipeline.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple
from dotenv import load_dotenv

# Load environment variables
env_path = Path(__file__).parent.parent / ".env"

DEFAULT_MODEL = "llama-3.3-70b-versatile"
DEFAULT_CORS_ORIGINS: Tuple[str, ...] = (
    "http://localhost:3000",
    "http://localhost:3001",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:3001",
)


@dataclass(frozen=True)
class ChartSettings:
    """Tunables for LLM access and request limits."""
    groq_api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    max_tokens: int = 4000
    temperature: float = 0.7
    timeout_seconds: float = 25.0
    max_prompt_length: int = 2000
    max_data_points: int = 1000
    cors_origins: Tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)


def _split_origins(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return DEFAULT_CORS_ORIGINS
    origins: List[str] = [o.strip() for o in raw.split(",") if o.strip()]
    return tuple(origins) or DEFAULT_CORS_ORIGINS


def load_settings() -> ChartSettings:
    """Build settings from the environment (and backend/.env if present)."""
    load_dotenv(env_path)

    return ChartSettings(
        groq_api_key=os.getenv("GROQ_API_KEY") or None,
        model=os.getenv("CHART_LLM_MODEL", DEFAULT_MODEL),
        max_tokens=int(os.getenv("CHART_LLM_MAX_TOKENS", "4000")),
        temperature=float(os.getenv("CHART_LLM_TEMPERATURE", "0.7")),
        timeout_seconds=float(os.getenv("CHART_LLM_TIMEOUT_SECONDS", "25")),
        max_prompt_length=int(os.getenv("CHART_MAX_PROMPT_LENGTH", "2000")),
        max_data_points=int(os.getenv("CHART_MAX_DATA_POINTS", "1000")),
        cors_origins=_split_origins(os.getenv("CHART_CORS_ORIGINS")),
    )
