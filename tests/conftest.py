from __future__ import annotations

import json
from typing import Any, List, Optional, Tuple

import pytest

from services.groq_client import CompletionOptions
from services.settings import ChartSettings


class StubLLM:
    """LLMCompletion that replays a canned reply (or raises a canned error)."""

    def __init__(self, reply: Any = None, error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls: List[Tuple[str, str, CompletionOptions]] = []

    def complete(self, system_prompt: str, user_prompt: str, options: CompletionOptions) -> str:
        self.calls.append((system_prompt, user_prompt, options))
        if self.error is not None:
            raise self.error
        if isinstance(self.reply, str):
            return self.reply
        return json.dumps(self.reply, ensure_ascii=False)


@pytest.fixture
def settings() -> ChartSettings:
    return ChartSettings(groq_api_key=None, max_prompt_length=2000, max_data_points=1000)


@pytest.fixture
def bar_config() -> dict:
    return {
        "title": {"text": "月度数据", "left": "center"},
        "xAxis": {"type": "category", "data": ["1月", "2月", "3月"]},
        "yAxis": {"type": "value"},
        "series": [
            {"type": "bar", "data": [100, 150, 200], "itemStyle": {"color": "#5470c6"}}
        ],
    }


@pytest.fixture
def pie_config() -> dict:
    return {
        "title": {"text": "市场份额"},
        "series": [
            {
                "name": "份额",
                "type": "pie",
                "radius": "60%",
                "data": [{"value": 335, "name": "A"}, {"value": 234, "name": "B"}],
            }
        ],
    }
