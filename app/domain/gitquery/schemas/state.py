from typing import Any, TypedDict

from app.domain.gitquery.schemas.base import AnswerResult, ParsedRepository


class QueryState(TypedDict, total=False):
    """LangGraph 질의 워크플로우 상태"""

    repository: ParsedRepository
    repository_url: str
    query: str
    session_id: str | None
    cache: Any
    commits: str
    issues: str
    pulls: str
    result: AnswerResult
    error_code: str
    error_message: str
