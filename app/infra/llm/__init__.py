from app.infra.llm.base import BaseLLMClient
from app.infra.llm.client import (
    consolidate_release_notes,
    predict_impact_level,
    summarize_release_notes,
)
from app.infra.llm.factory import get_llm_client, reset_clients
from app.infra.llm.gemini_client import GeminiClient
from app.infra.llm.openai_client import OpenAIClient
from app.infra.llm.vllm_client import VLLMClient

__all__ = [
    "BaseLLMClient",
    "OpenAIClient",
    "VLLMClient",
    "GeminiClient",
    "get_llm_client",
    "reset_clients",
    "summarize_release_notes",
    "predict_impact_level",
    "consolidate_release_notes",
]
