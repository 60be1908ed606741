"""테스트 공통 fixture"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import get_response_cache
from app.core.limiter import limiter
from app.domain.gitquery.cache import MemoryCache
from app.domain.gitquery.schemas import ParsedRepository, RepoSource
from app.main import app


@pytest.fixture
def github_repository() -> ParsedRepository:
    """테스트용 GitHub 레포지토리"""
    return ParsedRepository(owner="octocat", repo="hello-world", source=RepoSource.GITHUB)


@pytest.fixture
def gitlab_repository() -> ParsedRepository:
    """테스트용 GitLab 레포지토리 (서브그룹 포함)"""
    return ParsedRepository(owner="gitlab-org", repo="sub/project", source=RepoSource.GITLAB)


@pytest.fixture
def github_commit_json() -> dict:
    """GitHub 커밋 API 응답 항목"""
    return {
        "sha": "a1b2c3d4e5f6a7b8c9d0a1b2c3d4e5f6a7b8c9d0",
        "commit": {
            "message": "Fix login redirect\n\nLong description of the fix",
            "author": {"name": "Mona Lisa", "date": "2024-03-05T10:20:30Z"},
        },
        "author": {"login": "mona"},
        "html_url": "https://github.com/octocat/hello-world/commit/a1b2c3d",
    }


@pytest.fixture
def github_issue_json() -> dict:
    """GitHub 이슈 API 응답 항목"""
    return {
        "number": 42,
        "title": "Crash on startup",
        "user": {"login": "octocat"},
        "state": "open",
        "created_at": "2024-03-01T08:00:00Z",
        "labels": [{"name": "bug"}, {"name": "p1"}],
        "html_url": "https://github.com/octocat/hello-world/issues/42",
    }


@pytest.fixture
def github_pull_json() -> dict:
    """GitHub PR API 응답 항목"""
    return {
        "number": 43,
        "title": "Add dark mode",
        "user": {"login": "hubot"},
        "state": "open",
        "created_at": "2024-03-02T08:00:00Z",
        "labels": [],
        "html_url": "https://github.com/octocat/hello-world/pull/43",
        "pull_request": {"url": "https://api.github.com/repos/octocat/hello-world/pulls/43"},
    }


@pytest.fixture
def gitlab_commit_json() -> dict:
    """GitLab 커밋 API 응답 항목"""
    return {
        "id": "f00dbabef00dbabef00dbabef00dbabef00dbabe",
        "title": "Update CI pipeline",
        "message": "Update CI pipeline\n\nUse new runner image",
        "author_name": "Jane Doe",
        "committer_name": "GitLab Bot",
        "committed_date": "2024-02-10T12:00:00.000+01:00",
        "web_url": "https://gitlab.com/gitlab-org/sub/project/-/commit/f00dbabe",
    }


@pytest.fixture
def gitlab_issue_json() -> dict:
    """GitLab 이슈 API 응답 항목"""
    return {
        "iid": 7,
        "title": "Docs are outdated",
        "author": {"username": "jane"},
        "state": "opened",
        "created_at": "2024-02-11T09:00:00.000Z",
        "labels": ["documentation"],
        "web_url": "https://gitlab.com/gitlab-org/sub/project/-/issues/7",
    }


@pytest.fixture
def memory_cache() -> MemoryCache:
    """테스트용 메모리 캐시"""
    return MemoryCache(ttl_seconds=60)


@pytest.fixture
def mock_http_client():
    """프로바이더 공용 httpx 클라이언트 mock"""
    with patch("app.infra.providers.http._client") as mock_client:
        mock_client.get = AsyncMock()
        yield mock_client


@pytest.fixture
def json_response():
    """httpx.Response 생성 helper"""

    def _create(status_code: int = 200, json=None, text: str | None = None):
        if text is not None:
            return httpx.Response(status_code, text=text)
        return httpx.Response(status_code, json=json)

    return _create


@pytest.fixture
def mock_chat_client():
    """flow 실행용 LLM 클라이언트 mock

    structured 모델의 ainvoke 반환값을 테스트에서 지정한다.
    """
    with patch("app.infra.llm.client.get_chat_client") as mock_get:
        structured = MagicMock()
        structured.ainvoke = AsyncMock()
        mock_client = MagicMock()
        mock_client.with_structured_output.return_value = structured
        mock_get.return_value = mock_client
        yield structured


@pytest.fixture
def async_client(memory_cache):
    """비동기 HTTP 클라이언트 - 캐시 의존성 교체, 요청 제한 해제"""
    app.dependency_overrides[get_response_cache] = lambda: memory_cache
    limiter.enabled = False
    transport = ASGITransport(app=app)
    yield AsyncClient(transport=transport, base_url="http://test")
    app.dependency_overrides.clear()
    limiter.enabled = True
