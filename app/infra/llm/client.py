import os
from typing import TypeVar

import httpx
import openai
from google.api_core.exceptions import GoogleAPICallError
from langchain_core.exceptions import OutputParserException
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_google_genai.chat_models import ChatGoogleGenerativeAIError
from langfuse.langchain import CallbackHandler
from pydantic import BaseModel, ValidationError

from app.core.config import settings
from app.core.exceptions import LLMError, SchemaValidationError
from app.core.logging import get_logger
from app.domain.gitquery.prompts import (
    ANSWER_QUERY_HUMAN,
    ANSWER_QUERY_SYSTEM,
    COMMIT_SUMMARY_HUMAN,
    COMMIT_SUMMARY_SYSTEM,
    EXPLAIN_DIFF_HUMAN,
    EXPLAIN_DIFF_SYSTEM,
    SUGGEST_INSIGHTS_HUMAN,
    SUGGEST_INSIGHTS_SYSTEM,
)
from app.domain.gitquery.schemas import (
    AnswerQueryInput,
    AnswerQueryOutput,
    CommitSummaryInput,
    CommitSummaryOutput,
    ExplainDiffInput,
    ExplainDiffOutput,
    SuggestInsightsInput,
    SuggestInsightsOutput,
)
from app.infra.llm.factory import get_chat_client

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

DIFF_TRUNCATION_MARKER = "\n... [diff truncated: {omitted} more characters omitted] ..."

# SDK별 LLM 엔드포인트 에러 응답: OpenAI/vLLM, Gemini
LLM_API_ERRORS = (
    openai.APIStatusError,
    GoogleAPICallError,
    ChatGoogleGenerativeAIError,
    httpx.HTTPStatusError,
)

if settings.langfuse_public_key:
    os.environ["LANGFUSE_PUBLIC_KEY"] = settings.langfuse_public_key
if settings.langfuse_secret_key:
    os.environ["LANGFUSE_SECRET_KEY"] = settings.langfuse_secret_key
if settings.langfuse_base_url:
    os.environ["LANGFUSE_HOST"] = settings.langfuse_base_url


def get_langfuse_handler() -> CallbackHandler | None:
    """Langfuse 콜백 핸들러 반환"""
    if not settings.langfuse_public_key or not settings.langfuse_secret_key:
        return None

    return CallbackHandler()


def _llm_status(error: Exception) -> int | None:
    """SDK 예외에서 HTTP 상태 코드 추출"""
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    if isinstance(error, openai.APIStatusError):
        return error.status_code
    if isinstance(error, GoogleAPICallError):
        return error.code
    return None


def truncate_diff(diff_content: str, max_chars: int | None = None) -> str:
    """너무 긴 diff는 앞부분만 남기고 생략 표시를 붙임"""
    limit = settings.diff_max_chars if max_chars is None else max_chars
    if len(diff_content) <= limit:
        return diff_content
    omitted = len(diff_content) - limit
    return diff_content[:limit] + DIFF_TRUNCATION_MARKER.format(omitted=omitted)


async def _run_flow(
    flow: str,
    output_schema: type[T],
    system_prompt: str,
    human_prompt: str,
    tags: list[str],
    session_id: str | None = None,
) -> T:
    """구조화 출력으로 LLM 호출 후 출력 스키마 검증

    Raises:
        SchemaValidationError: 응답이 출력 스키마와 맞지 않는 경우
        LLMError: LLM 엔드포인트의 HTTP 에러 응답
    """
    langfuse_handler = get_langfuse_handler()
    config = {
        "callbacks": [langfuse_handler] if langfuse_handler else [],
        "run_name": flow,
        "metadata": {
            "langfuse_session_id": session_id,
            "langfuse_tags": ["gitprose", *tags],
        },
    }

    llm = get_chat_client().with_structured_output(output_schema)
    messages = [
        SystemMessage(content=system_prompt),
        HumanMessage(content=human_prompt),
    ]

    try:
        result = await llm.ainvoke(messages, config=config)
        if not isinstance(result, output_schema):
            result = output_schema.model_validate(result)
    except (ValidationError, OutputParserException) as e:
        logger.warning("LLM 응답 스키마 불일치 flow=%s error=%s", flow, type(e).__name__)
        raise SchemaValidationError(flow, detail=str(e)) from e
    except LLM_API_ERRORS as e:
        status = _llm_status(e)
        logger.error("LLM API 오류 flow=%s error=%s status=%s", flow, type(e).__name__, status)
        raise LLMError(detail=f"{flow}: {type(e).__name__} (HTTP {status})") from e

    return result


async def answer_git_query(
    flow_input: AnswerQueryInput, session_id: str | None = None
) -> AnswerQueryOutput:
    """레포지토리 데이터 기반 질의 응답"""
    logger.debug("질의 응답 요청 url=%s", flow_input.repository_url)

    human_content = ANSWER_QUERY_HUMAN.format(
        repository_url=flow_input.repository_url,
        query=flow_input.query,
        relevant_data=flow_input.relevant_data or "None provided.",
    )
    result = await _run_flow(
        "answer_query",
        AnswerQueryOutput,
        ANSWER_QUERY_SYSTEM,
        human_content,
        tags=["answer"],
        session_id=session_id,
    )

    logger.debug("질의 응답 완료 links=%d", len(result.relevant_links))
    return result


async def generate_commit_summary(
    flow_input: CommitSummaryInput, session_id: str | None = None
) -> CommitSummaryOutput:
    """최근 커밋 요약 생성"""
    human_content = COMMIT_SUMMARY_HUMAN.format(
        owner_name=flow_input.owner_name,
        repo_name=flow_input.repo_name,
        commit_data=flow_input.commit_data,
    )
    return await _run_flow(
        "summarize_commits",
        CommitSummaryOutput,
        COMMIT_SUMMARY_SYSTEM,
        human_content,
        tags=["summary"],
        session_id=session_id,
    )


async def suggest_repo_insights(
    flow_input: SuggestInsightsInput, session_id: str | None = None
) -> SuggestInsightsOutput:
    """레포지토리 이름으로 추천 질문 3개 생성"""
    human_content = SUGGEST_INSIGHTS_HUMAN.format(
        repo_name=flow_input.repo_name,
        owner_name=flow_input.owner_name,
    )
    return await _run_flow(
        "suggest_insights",
        SuggestInsightsOutput,
        SUGGEST_INSIGHTS_SYSTEM,
        human_content,
        tags=["suggest"],
        session_id=session_id,
    )


async def explain_commit_diff(
    flow_input: ExplainDiffInput, session_id: str | None = None
) -> ExplainDiffOutput:
    """커밋 diff의 기능적 의미 설명"""
    diff_content = truncate_diff(flow_input.diff_content)
    if len(diff_content) < len(flow_input.diff_content):
        logger.info(
            "diff 길이 초과로 생략 sha=%s original=%d",
            flow_input.commit_sha[:7],
            len(flow_input.diff_content),
        )

    human_content = EXPLAIN_DIFF_HUMAN.format(
        commit_sha=flow_input.commit_sha,
        owner_name=flow_input.owner_name,
        repo_name=flow_input.repo_name,
        diff_content=diff_content,
    )
    return await _run_flow(
        "explain_diff",
        ExplainDiffOutput,
        EXPLAIN_DIFF_SYSTEM,
        human_content,
        tags=["diff"],
        session_id=session_id,
    )
