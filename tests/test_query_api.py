"""질의 API 엔드포인트 테스트"""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from app.core.exceptions import UNEXPECTED_ERROR_MESSAGE, ErrorCode
from app.domain.gitquery.schemas import (
    ActionResult,
    AnswerQueryOutput,
    AnswerResult,
    ExplainDiffOutput,
)


class TestAnswerEndpoint:
    """POST /api/v1/query/answer 테스트"""

    @pytest.mark.asyncio
    async def test_answer_success(self, async_client, memory_cache):
        """camelCase 요청/응답과 캐시 의존성 전달"""
        result = ActionResult.success(
            AnswerResult(
                answer="Login was fixed.",
                relevant_links=["https://github.com/octocat/hello-world/commit/a1b2c3d"],
            )
        )
        with patch(
            "app.domain.gitquery.agent.answer_query",
            new_callable=AsyncMock,
            return_value=result,
        ) as mock_answer:
            async with async_client as client:
                response = await client.post(
                    "/api/v1/query/answer",
                    json={"repositoryUrl": "octocat/hello-world", "query": "What changed?"},
                )

        assert response.status_code == 200
        assert response.json() == {
            "answer": "Login was fixed.",
            "relevantLinks": ["https://github.com/octocat/hello-world/commit/a1b2c3d"],
            "kind": "answer",
        }
        assert mock_answer.call_args.args == ("octocat/hello-world", "What changed?")
        assert mock_answer.call_args.kwargs["cache"] is memory_cache

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error_code,status_code",
        [
            (ErrorCode.INVALID_INPUT, 400),
            (ErrorCode.UNSUPPORTED_PROVIDER, 422),
            (ErrorCode.PROVIDER_HTTP_ERROR, 502),
            (ErrorCode.PROVIDER_RATE_LIMITED, 502),
            (ErrorCode.SCHEMA_VALIDATION_ERROR, 502),
            (ErrorCode.TRANSPORT_ERROR, 504),
        ],
    )
    async def test_answer_failure_status(self, async_client, error_code, status_code):
        """에러 코드별 HTTP 상태와 메시지"""
        with patch(
            "app.domain.gitquery.agent.answer_query",
            new_callable=AsyncMock,
            return_value=ActionResult.failure(error_code, "Something failed."),
        ):
            async with async_client as client:
                response = await client.post(
                    "/api/v1/query/answer",
                    json={"repositoryUrl": "octocat/hello-world", "query": "What changed?"},
                )

        assert response.status_code == status_code
        assert response.json()["error_code"] == error_code.value
        assert response.json()["message"] == "Something failed."

    @pytest.mark.asyncio
    async def test_missing_field(self, async_client):
        async with async_client as client:
            response = await client.post("/api/v1/query/answer", json={"query": "What changed?"})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_empty_url_end_to_end(self, async_client):
        """빈 URL은 400과 입력 안내 메시지"""
        async with async_client as client:
            response = await client.post(
                "/api/v1/query/answer",
                json={"repositoryUrl": "", "query": "What changed?"},
            )

        assert response.status_code == 400
        assert response.json()["message"] == "Please enter a repository URL."

    @pytest.mark.asyncio
    async def test_full_pipeline_with_mocked_dependencies(
        self, async_client, mock_http_client, json_response, github_commit_json
    ):
        """프로바이더와 LLM만 mock으로 두고 전체 경로 실행"""
        mock_http_client.get.side_effect = [
            json_response(json=[github_commit_json]),
            json_response(json=[]),
            json_response(json=[]),
        ]
        output = AnswerQueryOutput(
            answer="The latest commit fixes the login redirect.",
            relevant_links=["https://github.com/octocat/hello-world/commit/a1b2c3d"],
        )
        with patch(
            "app.domain.gitquery.workflow.answer_git_query",
            new_callable=AsyncMock,
            return_value=output,
        ) as mock_answer:
            async with async_client as client:
                response = await client.post(
                    "/api/v1/query/answer",
                    json={
                        "repositoryUrl": "https://github.com/octocat/hello-world",
                        "query": "What was fixed?",
                    },
                )

        assert response.status_code == 200
        assert response.json()["answer"] == output.answer
        relevant_data = mock_answer.call_args.args[0].relevant_data
        assert relevant_data.startswith("COMMITS:\nCommit SHA: a1b2c3d")
        assert "ISSUES:" not in relevant_data
        assert mock_http_client.get.await_count == 3

    @pytest.mark.asyncio
    async def test_transport_error_end_to_end(self, async_client, mock_http_client):
        mock_http_client.get.side_effect = httpx.ConnectTimeout("timed out")

        async with async_client as client:
            response = await client.post(
                "/api/v1/query/answer",
                json={"repositoryUrl": "octocat/hello-world", "query": "What changed?"},
            )

        assert response.status_code == 504
        assert UNEXPECTED_ERROR_MESSAGE in response.json()["message"]


class TestExplainCommitEndpoint:
    """POST /api/v1/query/explain-commit 테스트"""

    @pytest.mark.asyncio
    async def test_success(self, async_client):
        with patch(
            "app.domain.gitquery.agent.explain_commit",
            new_callable=AsyncMock,
            return_value=ActionResult.success(ExplainDiffOutput(explanation="Adds caching.")),
        ):
            async with async_client as client:
                response = await client.post(
                    "/api/v1/query/explain-commit",
                    json={"repositoryUrl": "https://gitlab.com/group/project", "sha": " a1b2c3d "},
                )

        assert response.status_code == 200
        assert response.json() == {
            "explanation": "Adds caching.",
            "commitUrl": "https://gitlab.com/group/project/-/commit/a1b2c3d",
        }


class TestSuggestionsEndpoint:
    """POST /api/v1/query/suggestions 테스트"""

    @pytest.mark.asyncio
    async def test_success(self, async_client):
        questions = ["Q1?", "Q2?", "Q3?"]
        with patch(
            "app.domain.gitquery.agent.suggest_questions",
            new_callable=AsyncMock,
            return_value=ActionResult.success(questions),
        ):
            async with async_client as client:
                response = await client.post(
                    "/api/v1/query/suggestions",
                    json={"repositoryUrl": "facebook/react"},
                )

        assert response.status_code == 200
        assert response.json() == {"questions": questions}


class TestCommitSummaryEndpoint:
    """POST /api/v1/query/commit-summary 테스트"""

    @pytest.mark.asyncio
    async def test_success(self, async_client):
        with patch(
            "app.domain.gitquery.agent.summarize_commits",
            new_callable=AsyncMock,
            return_value=ActionResult.success("Two fixes."),
        ):
            async with async_client as client:
                response = await client.post(
                    "/api/v1/query/commit-summary",
                    json={"repositoryUrl": "octocat/hello-world"},
                )

        assert response.status_code == 200
        assert response.json() == {"summary": "Two fixes."}

    @pytest.mark.asyncio
    async def test_response_has_request_id_header(self, async_client):
        with patch(
            "app.domain.gitquery.agent.summarize_commits",
            new_callable=AsyncMock,
            return_value=ActionResult.success("Two fixes."),
        ):
            async with async_client as client:
                response = await client.post(
                    "/api/v1/query/commit-summary",
                    json={"repositoryUrl": "octocat/hello-world"},
                )

        assert response.headers.get("X-Request-ID")
