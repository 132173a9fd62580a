"""
AI Charts Backend API

Turns natural language descriptions of data into ECharts configurations.
The LLM extracts data, the service validates and styles it.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from routers import charts
from services.chart_generation import ChartGenerator
from services.chart_prompts import PROMPT_VERSION
from services.groq_client import GroqCompletion, LLMCompletion
from services.settings import ChartSettings, load_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    settings: ChartSettings = app.state.settings
    logger.info(
        f"Chart API starting: model={settings.model}, prompt={PROMPT_VERSION}, "
        f"max_points={settings.max_data_points}, timeout={settings.timeout_seconds}s"
    )

    yield


def create_app(
    settings: Optional[ChartSettings] = None,
    llm: Optional[LLMCompletion] = None,
) -> FastAPI:
    """Build the API with one settings value and one LLM for the process."""
    settings = settings or load_settings()
    llm = llm or GroqCompletion.from_settings(settings)

    app = FastAPI(
        title="AI Charts API",
        description="Natural language to ECharts configuration. AI extracts, rules validate.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.chart_generator = ChartGenerator(settings, llm)

    # CORS configuration for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(charts.router)

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {
            "name": "AI Charts API",
            "status": "healthy",
            "version": "0.1.0",
        }

    @app.get("/api/health")
    async def health_check():
        """Detailed health check."""
        return {
            "status": "healthy",
            "services": {
                "llm": "configured" if settings.groq_api_key else "missing_api_key",
                "prompt_version": PROMPT_VERSION,
            }
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    uvicorn.run("main:app", host="0.0.0.0", port=8000)
