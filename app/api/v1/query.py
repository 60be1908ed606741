from fastapi import APIRouter, Depends

from app.api.dependencies import get_response_cache
from app.api.v1.schemas import (
    AnswerRequest,
    AnswerResponse,
    CommitSummaryResponse,
    ExplainCommitRequest,
    ExplainCommitResponse,
    RepositoryRequest,
    SuggestionsResponse,
)
from app.core.context import get_request_id
from app.core.exceptions import ERROR_STATUS_CODES, CustomException, ErrorCode
from app.core.logging import get_logger
from app.domain.gitquery import agent
from app.domain.gitquery.cache import ResponseCache
from app.domain.gitquery.parsers import commit_url, parse_repository_url
from app.domain.gitquery.schemas import ActionResult

router = APIRouter(prefix="/query", tags=["query"])
logger = get_logger(__name__)


def _unwrap(result: ActionResult):
    """실패 결과를 HTTP 에러로 변환"""
    if result.ok:
        return result.data

    error_code = result.error_code or ErrorCode.INTERNAL_ERROR
    raise CustomException(
        status_code=ERROR_STATUS_CODES.get(error_code, 500),
        error_code=error_code,
        message=result.error_message or "Request failed.",
    )


@router.post("/answer", response_model=AnswerResponse)
async def answer(
    request: AnswerRequest,
    cache: ResponseCache = Depends(get_response_cache),
) -> AnswerResponse:
    result = await agent.answer_query(
        request.repository_url,
        request.query,
        cache=cache,
        session_id=get_request_id(),
    )
    data = _unwrap(result)
    return AnswerResponse(answer=data.answer, relevant_links=data.relevant_links, kind=data.kind)


@router.post("/explain-commit", response_model=ExplainCommitResponse)
async def explain_commit(
    request: ExplainCommitRequest,
    cache: ResponseCache = Depends(get_response_cache),
) -> ExplainCommitResponse:
    result = await agent.explain_commit(
        request.repository_url,
        request.sha,
        cache=cache,
        session_id=get_request_id(),
    )
    data = _unwrap(result)
    repository = parse_repository_url(request.repository_url)
    return ExplainCommitResponse(
        explanation=data.explanation,
        commit_url=commit_url(repository, request.sha),
    )


@router.post("/suggestions", response_model=SuggestionsResponse)
async def suggestions(request: RepositoryRequest) -> SuggestionsResponse:
    result = await agent.suggest_questions(request.repository_url, session_id=get_request_id())
    return SuggestionsResponse(questions=_unwrap(result))


@router.post("/commit-summary", response_model=CommitSummaryResponse)
async def commit_summary(
    request: RepositoryRequest,
    cache: ResponseCache = Depends(get_response_cache),
) -> CommitSummaryResponse:
    result = await agent.summarize_commits(
        request.repository_url,
        cache=cache,
        session_id=get_request_id(),
    )
    return CommitSummaryResponse(summary=_unwrap(result))
