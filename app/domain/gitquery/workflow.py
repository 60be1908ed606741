from typing import Literal

from langgraph.graph import END, StateGraph
from langgraph.graph.state import CompiledStateGraph

from app.core.exceptions import CustomException, ErrorCode
from app.core.logging import get_logger
from app.domain.gitquery.normalizer import build_query_context
from app.domain.gitquery.schemas import AnswerQueryInput, AnswerResult, QueryState
from app.domain.gitquery.service import SectionKind, collect_section
from app.infra.llm.client import answer_git_query

logger = get_logger(__name__)

SECTION_LABELS: dict[str, str] = {
    "commits": "commit data",
    "issues": "issue data",
    "pulls": "pull request data",
}


async def _collect_node(state: QueryState, kind: SectionKind) -> QueryState:
    """섹션 수집 공통 처리: 실패 시 에러를 상태에 기록"""
    repository = state["repository"]
    logger.info("collect_%s_node 시작 repo=%s", kind, repository.label)

    try:
        text = await collect_section(kind, repository, state.get("cache"))
        return {**state, kind: text}

    except CustomException as e:
        logger.error("collect_%s_node 실패 error_code=%s", kind, e.error_code)
        return {
            **state,
            "error_code": e.error_code,
            "error_message": f"Error fetching {SECTION_LABELS[kind]}: {e.message}",
        }

    except (KeyError, TypeError) as e:
        logger.error("collect_%s_node 데이터 오류 error=%s", kind, e, exc_info=True)
        return {
            **state,
            "error_code": ErrorCode.DATA_PARSE_ERROR,
            "error_message": f"Error fetching {SECTION_LABELS[kind]}: unexpected response format",
        }


async def collect_commits_node(state: QueryState) -> QueryState:
    return await _collect_node(state, "commits")


async def collect_issues_node(state: QueryState) -> QueryState:
    return await _collect_node(state, "issues")


async def collect_pulls_node(state: QueryState) -> QueryState:
    return await _collect_node(state, "pulls")


async def answer_node(state: QueryState) -> QueryState:
    """수집된 섹션으로 컨텍스트를 만들고 질의 응답 flow 호출"""
    relevant_data = build_query_context(
        state.get("commits"),
        state.get("issues"),
        state.get("pulls"),
    )
    logger.info("answer_node 시작 context_chars=%d", len(relevant_data))

    try:
        output = await answer_git_query(
            AnswerQueryInput(
                repository_url=state["repository_url"],
                query=state["query"],
                relevant_data=relevant_data,
            ),
            session_id=state.get("session_id"),
        )
    except CustomException as e:
        logger.error("answer_node 실패 error_code=%s", e.error_code)
        return {
            **state,
            "error_code": e.error_code,
            "error_message": f"AI processing error: {e.message}",
        }

    logger.info("answer_node 완료 links=%d", len(output.relevant_links))
    return {
        **state,
        "result": AnswerResult(answer=output.answer, relevant_links=output.relevant_links),
    }


def _route(next_node: str):
    def route(state: QueryState) -> Literal["next", "end"]:
        """에러가 있으면 남은 조회와 LLM 호출 없이 종료"""
        if state.get("error_code"):
            logger.info("워크플로우 중단 next=%s", next_node)
            return "end"
        return "next"

    return route


def create_query_workflow() -> CompiledStateGraph:
    """질의 응답 워크플로우 생성: commits -> issues -> pulls -> answer"""
    workflow = StateGraph(QueryState)

    workflow.add_node("collect_commits", collect_commits_node)
    workflow.add_node("collect_issues", collect_issues_node)
    workflow.add_node("collect_pulls", collect_pulls_node)
    workflow.add_node("answer", answer_node)

    workflow.set_entry_point("collect_commits")

    for current, following in [
        ("collect_commits", "collect_issues"),
        ("collect_issues", "collect_pulls"),
        ("collect_pulls", "answer"),
    ]:
        workflow.add_conditional_edges(
            current,
            _route(following),
            {
                "next": following,
                "end": END,
            },
        )

    workflow.add_edge("answer", END)

    return workflow.compile()
