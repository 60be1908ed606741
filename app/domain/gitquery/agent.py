"""질의 진입점

모든 함수는 예외를 밖으로 던지지 않고 ActionResult로 성공/실패를 반환한다.
"""

from pydantic import ValidationError

from app.core.config import settings
from app.core.context import set_repository
from app.core.exceptions import (
    UNEXPECTED_ERROR_MESSAGE,
    CustomException,
    ErrorCode,
    InputError,
    UnsupportedProviderError,
)
from app.core.logging import get_logger
from app.domain.gitquery.cache import ResponseCache
from app.domain.gitquery.parsers import (
    commit_url,
    match_explain_commit,
    parse_repository_url,
)
from app.domain.gitquery.schemas import (
    ActionResult,
    AnswerResult,
    CommitSummaryInput,
    ExplainDiffInput,
    ExplainDiffOutput,
    ParsedRepository,
    SuggestInsightsInput,
)
from app.domain.gitquery.service import collect_commit_data, collect_commit_diff
from app.domain.gitquery.workflow import create_query_workflow
from app.infra.llm.client import (
    explain_commit_diff,
    generate_commit_summary,
    suggest_repo_insights,
)

logger = get_logger(__name__)

_query_workflow = create_query_workflow()

PROVIDER_LABELS = {"github": "GitHub", "gitlab": "GitLab"}


def resolve_repository(repository_url: str | None) -> ParsedRepository:
    """URL 파싱 후 처리 가능한 프로바이더인지 확인

    Raises:
        InputError: URL이 비었거나 형식이 잘못된 경우
        UnsupportedProviderError: 비활성화된 프로바이더인 경우
    """
    parsed = parse_repository_url(repository_url)
    if not parsed.is_valid:
        raise InputError(parsed.error or "Invalid repository URL.")

    if parsed.source.value not in settings.enabled_provider_set:
        raise UnsupportedProviderError(PROVIDER_LABELS.get(parsed.source.value, parsed.source.value))

    set_repository(parsed.label)
    return parsed


def _unexpected(action: str, exc: Exception) -> ActionResult:
    logger.error("%s 실패 error=%s", action, type(exc).__name__, exc_info=True)
    return ActionResult.failure(ErrorCode.TRANSPORT_ERROR, UNEXPECTED_ERROR_MESSAGE)


async def answer_query(
    repository_url: str,
    query: str,
    cache: ResponseCache | None = None,
    session_id: str | None = None,
) -> ActionResult[AnswerResult]:
    """레포지토리 질의 응답

    'explain commit <sha>' 형태의 질의는 커밋 diff 설명으로 처리한다.

    Args:
        repository_url: 레포지토리 URL
        query: 자연어 질의
        cache: 응답 캐시
        session_id: Langfuse 세션 ID

    Returns:
        응답 또는 에러
    """
    if not repository_url or not repository_url.strip():
        return ActionResult.failure(ErrorCode.INVALID_INPUT, "Please enter a repository URL.")
    if not query or not query.strip():
        return ActionResult.failure(ErrorCode.INVALID_INPUT, "Please enter your query.")

    try:
        repository = resolve_repository(repository_url)
    except CustomException as e:
        return ActionResult.from_exception(e)

    sha = match_explain_commit(query)
    if sha:
        logger.info("커밋 설명 질의 감지 sha=%s", sha[:7])
        explained = await explain_commit(repository_url, sha, cache=cache, session_id=session_id)
        if not explained.ok:
            return ActionResult.failure(explained.error_code, explained.error_message)
        return ActionResult.success(
            AnswerResult(
                answer=explained.data.explanation,
                relevant_links=[commit_url(repository, sha)],
                kind="commit_explanation",
            )
        )

    logger.info("질의 시작 repo=%s", repository.label)
    try:
        state = await _query_workflow.ainvoke(
            {
                "repository": repository,
                "repository_url": repository_url.strip(),
                "query": query.strip(),
                "session_id": session_id,
                "cache": cache,
            }
        )
    except Exception as e:
        return _unexpected("질의", e)

    if state.get("error_code"):
        return ActionResult.failure(state["error_code"], state["error_message"])
    return ActionResult.success(state["result"])


async def explain_commit(
    repository_url: str,
    sha: str,
    cache: ResponseCache | None = None,
    session_id: str | None = None,
) -> ActionResult[ExplainDiffOutput]:
    """커밋 diff를 조회해 기능적 의미 설명"""
    try:
        repository = resolve_repository(repository_url)
        flow_input = _build_input(
            ExplainDiffInput,
            owner_name=repository.owner,
            repo_name=repository.repo,
            commit_sha=(sha or "").strip(),
            diff_content="",
        )
        diff_content = await collect_commit_diff(repository, flow_input.commit_sha, cache)
        if not diff_content.strip():
            return ActionResult.failure(
                ErrorCode.INVALID_INPUT,
                f"Commit {flow_input.commit_sha[:7]} has no diff content to explain.",
            )

        output = await explain_commit_diff(
            flow_input.model_copy(update={"diff_content": diff_content}),
            session_id=session_id,
        )
        return ActionResult.success(output)

    except CustomException as e:
        logger.warning("커밋 설명 실패 error_code=%s", e.error_code)
        return ActionResult.from_exception(e)
    except Exception as e:
        return _unexpected("커밋 설명", e)


async def suggest_questions(
    repository_url: str,
    session_id: str | None = None,
) -> ActionResult[list[str]]:
    """레포지토리 이름만으로 추천 질문 3개 생성 - 프로바이더 조회 없음"""
    try:
        repository = resolve_repository(repository_url)
        flow_input = _build_input(
            SuggestInsightsInput,
            repo_name=repository.repo,
            owner_name=repository.owner,
        )
        output = await suggest_repo_insights(flow_input, session_id=session_id)
        return ActionResult.success(output.questions)

    except CustomException as e:
        logger.warning("추천 질문 생성 실패 error_code=%s", e.error_code)
        return ActionResult.from_exception(e)
    except Exception as e:
        return _unexpected("추천 질문 생성", e)


async def summarize_commits(
    repository_url: str,
    cache: ResponseCache | None = None,
    session_id: str | None = None,
) -> ActionResult[str]:
    """최근 커밋 요약"""
    try:
        repository = resolve_repository(repository_url)
        commit_data = await collect_commit_data(repository, cache)
        flow_input = _build_input(
            CommitSummaryInput,
            repo_name=repository.repo,
            owner_name=repository.owner,
            commit_data=commit_data,
        )
        output = await generate_commit_summary(flow_input, session_id=session_id)
        return ActionResult.success(output.summary)

    except CustomException as e:
        logger.warning("커밋 요약 실패 error_code=%s", e.error_code)
        return ActionResult.from_exception(e)
    except Exception as e:
        return _unexpected("커밋 요약", e)


def _build_input(schema, **fields):
    """flow 입력 모델 생성 - 스키마 불일치는 InputError"""
    try:
        return schema(**fields)
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise InputError(f"Invalid input for {schema.__name__}: {errors}") from e
