"""질의 진입점 테스트"""

from unittest.mock import AsyncMock, patch

import pytest

from app.core.exceptions import (
    UNEXPECTED_ERROR_MESSAGE,
    ErrorCode,
    InputError,
    ProviderHttpError,
    TransportError,
    UnsupportedProviderError,
)
from app.domain.gitquery import agent
from app.domain.gitquery.schemas import (
    AnswerQueryOutput,
    CommitSummaryOutput,
    ExplainDiffOutput,
    RepoSource,
    SuggestInsightsOutput,
)


class TestResolveRepository:
    """resolve_repository 함수 테스트"""

    def test_valid(self):
        repository = agent.resolve_repository("https://gitlab.com/group/sub/project")

        assert repository.source == RepoSource.GITLAB
        assert repository.repo == "sub/project"

    def test_invalid_url(self):
        with pytest.raises(InputError):
            agent.resolve_repository("https://bitbucket.org/o/r")

    def test_disabled_provider(self):
        """비활성화된 프로바이더는 UnsupportedProviderError"""
        with patch("app.domain.gitquery.agent.settings") as mock_settings:
            mock_settings.enabled_provider_set = frozenset({"github"})

            with pytest.raises(UnsupportedProviderError) as exc_info:
                agent.resolve_repository("https://gitlab.com/group/project")

        assert "GitLab URL recognized" in exc_info.value.message


class TestAnswerQuery:
    """answer_query 함수 테스트"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "url,query,expected_message",
        [
            ("", "What changed?", "Please enter a repository URL."),
            ("   ", "What changed?", "Please enter a repository URL."),
            ("octocat/hello-world", "", "Please enter your query."),
            ("octocat/hello-world", "  ", "Please enter your query."),
        ],
    )
    async def test_empty_input(self, url, query, expected_message):
        """빈 입력은 네트워크 호출 없이 실패"""
        with patch("app.domain.gitquery.workflow.collect_section", new_callable=AsyncMock) as collect:
            result = await agent.answer_query(url, query)

        assert result.ok is False
        assert result.error_code == ErrorCode.INVALID_INPUT
        assert result.error_message == expected_message
        collect.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_url(self):
        with patch("app.domain.gitquery.workflow.collect_section", new_callable=AsyncMock) as collect:
            result = await agent.answer_query("not a url", "What changed?")

        assert result.error_code == ErrorCode.INVALID_INPUT
        assert "https://github.com/owner/repo" in result.error_message
        collect.assert_not_called()

    @pytest.mark.asyncio
    async def test_unsupported_provider(self):
        with patch("app.domain.gitquery.agent.settings") as mock_settings:
            mock_settings.enabled_provider_set = frozenset({"github"})

            result = await agent.answer_query("https://gitlab.com/group/project", "What changed?")

        assert result.error_code == ErrorCode.UNSUPPORTED_PROVIDER

    @pytest.mark.asyncio
    async def test_success(self, memory_cache):
        """워크플로우 결과를 그대로 반환"""
        output = AnswerQueryOutput(
            answer="Recent work focused on login.",
            relevant_links=["https://github.com/octocat/hello-world/commit/a1b2c3d"],
        )
        with (
            patch(
                "app.domain.gitquery.workflow.collect_section",
                new_callable=AsyncMock,
                return_value="text",
            ),
            patch(
                "app.domain.gitquery.workflow.answer_git_query",
                new_callable=AsyncMock,
                return_value=output,
            ) as mock_answer,
        ):
            result = await agent.answer_query(
                " https://github.com/octocat/hello-world ",
                " What changed? ",
                cache=memory_cache,
                session_id="session-1",
            )

        assert result.ok
        assert result.data.answer == output.answer
        assert result.data.relevant_links == output.relevant_links
        flow_input = mock_answer.call_args.args[0]
        assert flow_input.query == "What changed?"
        assert flow_input.repository_url == "https://github.com/octocat/hello-world"
        assert mock_answer.call_args.kwargs["session_id"] == "session-1"

    @pytest.mark.asyncio
    async def test_provider_failure(self):
        error = ProviderHttpError("GitHub", 404, "Failed to fetch commits from GitHub (404): Not Found")
        with (
            patch(
                "app.domain.gitquery.workflow.collect_section",
                new_callable=AsyncMock,
                side_effect=error,
            ),
            patch(
                "app.domain.gitquery.workflow.answer_git_query",
                new_callable=AsyncMock,
            ) as mock_answer,
        ):
            result = await agent.answer_query("octocat/hello-world", "What changed?")

        assert result.error_code == ErrorCode.PROVIDER_HTTP_ERROR
        assert result.error_message.startswith("Error fetching commit data: ")
        mock_answer.assert_not_called()

    @pytest.mark.asyncio
    async def test_transport_failure_uses_generic_message(self):
        """네트워크 실패는 일반 메시지로 변환"""
        with patch(
            "app.domain.gitquery.workflow.collect_section",
            new_callable=AsyncMock,
            side_effect=TransportError(detail="GitHub commits: ConnectError"),
        ):
            result = await agent.answer_query("octocat/hello-world", "What changed?")

        assert result.error_code == ErrorCode.TRANSPORT_ERROR
        assert UNEXPECTED_ERROR_MESSAGE in result.error_message

    @pytest.mark.asyncio
    async def test_explain_commit_query_routed(self):
        """'explain commit <sha>' 질의는 diff 설명으로 처리"""
        with (
            patch(
                "app.domain.gitquery.agent.collect_commit_diff",
                new_callable=AsyncMock,
                return_value="diff --git a/x b/x",
            ),
            patch(
                "app.domain.gitquery.agent.explain_commit_diff",
                new_callable=AsyncMock,
                return_value=ExplainDiffOutput(explanation="Adds caching."),
            ),
            patch(
                "app.domain.gitquery.workflow.collect_section",
                new_callable=AsyncMock,
            ) as collect,
        ):
            result = await agent.answer_query("octocat/hello-world", "explain commit a1b2c3d")

        assert result.ok
        assert result.data.kind == "commit_explanation"
        assert result.data.answer == "Adds caching."
        assert result.data.relevant_links == [
            "https://github.com/octocat/hello-world/commit/a1b2c3d"
        ]
        collect.assert_not_called()

    @pytest.mark.asyncio
    async def test_short_sha_not_routed(self):
        """7자 미만 SHA는 일반 질의로 처리"""
        output = AnswerQueryOutput(answer="ok", relevant_links=[])
        with (
            patch(
                "app.domain.gitquery.workflow.collect_section",
                new_callable=AsyncMock,
                return_value="",
            ),
            patch(
                "app.domain.gitquery.workflow.answer_git_query",
                new_callable=AsyncMock,
                return_value=output,
            ),
            patch(
                "app.domain.gitquery.agent.explain_commit_diff",
                new_callable=AsyncMock,
            ) as mock_explain,
        ):
            result = await agent.answer_query("octocat/hello-world", "explain commit abc")

        assert result.data.kind == "answer"
        mock_explain.assert_not_called()


class TestExplainCommit:
    """explain_commit 함수 테스트"""

    @pytest.mark.asyncio
    async def test_invalid_sha(self):
        with patch("app.domain.gitquery.agent.collect_commit_diff", new_callable=AsyncMock) as mock_diff:
            result = await agent.explain_commit("octocat/hello-world", "xyz")

        assert result.error_code == ErrorCode.INVALID_INPUT
        mock_diff.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_diff(self):
        with patch(
            "app.domain.gitquery.agent.collect_commit_diff",
            new_callable=AsyncMock,
            return_value="   ",
        ):
            result = await agent.explain_commit("octocat/hello-world", "a1b2c3d")

        assert result.error_code == ErrorCode.INVALID_INPUT
        assert "a1b2c3d" in result.error_message

    @pytest.mark.asyncio
    async def test_success_passes_diff(self):
        with (
            patch(
                "app.domain.gitquery.agent.collect_commit_diff",
                new_callable=AsyncMock,
                return_value="diff --git a/x b/x",
            ),
            patch(
                "app.domain.gitquery.agent.explain_commit_diff",
                new_callable=AsyncMock,
                return_value=ExplainDiffOutput(explanation="Adds caching."),
            ) as mock_explain,
        ):
            result = await agent.explain_commit("https://gitlab.com/group/project", "A1B2C3D")

        assert result.data.explanation == "Adds caching."
        flow_input = mock_explain.call_args.args[0]
        assert flow_input.diff_content == "diff --git a/x b/x"
        assert flow_input.commit_sha == "A1B2C3D"
        assert flow_input.owner_name == "group"

    @pytest.mark.asyncio
    async def test_unexpected_error(self):
        """예상하지 못한 예외도 ActionResult로 반환"""
        with patch(
            "app.domain.gitquery.agent.collect_commit_diff",
            new_callable=AsyncMock,
            side_effect=RuntimeError("boom"),
        ):
            result = await agent.explain_commit("octocat/hello-world", "a1b2c3d")

        assert result.error_code == ErrorCode.TRANSPORT_ERROR
        assert result.error_message == UNEXPECTED_ERROR_MESSAGE


class TestSuggestQuestions:
    """suggest_questions 함수 테스트"""

    @pytest.mark.asyncio
    async def test_success_without_provider_calls(self):
        """레포지토리 이름만 사용하고 프로바이더는 호출하지 않음"""
        questions = ["Q1?", "Q2?", "Q3?"]
        with (
            patch(
                "app.domain.gitquery.agent.suggest_repo_insights",
                new_callable=AsyncMock,
                return_value=SuggestInsightsOutput(questions=questions),
            ) as mock_suggest,
            patch("app.infra.providers.http._client") as mock_client,
        ):
            result = await agent.suggest_questions("facebook/react")

        assert result.data == questions
        flow_input = mock_suggest.call_args.args[0]
        assert (flow_input.owner_name, flow_input.repo_name) == ("facebook", "react")
        mock_client.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_url(self):
        result = await agent.suggest_questions("")

        assert result.error_code == ErrorCode.INVALID_INPUT


class TestSummarizeCommits:
    """summarize_commits 함수 테스트"""

    @pytest.mark.asyncio
    async def test_success(self):
        with (
            patch(
                "app.domain.gitquery.agent.collect_commit_data",
                new_callable=AsyncMock,
                return_value='[{"sha": "a1b2c3d"}]',
            ),
            patch(
                "app.domain.gitquery.agent.generate_commit_summary",
                new_callable=AsyncMock,
                return_value=CommitSummaryOutput(summary="One fix."),
            ) as mock_summary,
        ):
            result = await agent.summarize_commits("octocat/hello-world")

        assert result.data == "One fix."
        assert mock_summary.call_args.args[0].commit_data == '[{"sha": "a1b2c3d"}]'

    @pytest.mark.asyncio
    async def test_provider_error(self):
        with patch(
            "app.domain.gitquery.agent.collect_commit_data",
            new_callable=AsyncMock,
            side_effect=ProviderHttpError("GitHub", 403, "rate limit", rate_limited=True),
        ):
            result = await agent.summarize_commits("octocat/hello-world")

        assert result.error_code == ErrorCode.PROVIDER_RATE_LIMITED
