from app.core.config import settings
from app.core.logging import get_logger
from app.infra.llm.base import BaseLLMClient
from app.infra.llm.gemini_client import GeminiClient
from app.infra.llm.openai_client import OpenAIClient
from app.infra.llm.vllm_client import VLLMClient

logger = get_logger(__name__)

CLIENTS: dict[str, type[BaseLLMClient]] = {
    "openai": OpenAIClient,
    "vllm": VLLMClient,
    "gemini": GeminiClient,
}

_chat_client: BaseLLMClient | None = None


def get_chat_client() -> BaseLLMClient:
    """flow 실행용 LLM 클라이언트 반환 - 첫 호출 시 생성"""
    global _chat_client

    if _chat_client is not None:
        return _chat_client

    provider = settings.llm_provider.lower()
    client_cls = CLIENTS.get(provider)
    if client_cls is None:
        raise ValueError(f"지원하지 않는 LLM 프로바이더: {settings.llm_provider}")

    _chat_client = client_cls()
    logger.info("LLM 클라이언트 초기화 provider=%s model=%s", provider, _chat_client.get_model_name())
    return _chat_client


def reset_clients() -> None:
    """클라이언트 캐시 초기화 - 테스트용"""
    global _chat_client
    _chat_client = None
