from app.infra.llm.base import BaseLLMClient
from app.infra.llm.client import (
    answer_git_query,
    explain_commit_diff,
    generate_commit_summary,
    suggest_repo_insights,
)
from app.infra.llm.factory import get_chat_client, reset_clients
from app.infra.llm.gemini_client import GeminiClient
from app.infra.llm.openai_client import OpenAIClient
from app.infra.llm.vllm_client import VLLMClient

__all__ = [
    "BaseLLMClient",
    "OpenAIClient",
    "VLLMClient",
    "GeminiClient",
    "get_chat_client",
    "reset_clients",
    "answer_git_query",
    "generate_commit_summary",
    "suggest_repo_insights",
    "explain_commit_diff",
]
