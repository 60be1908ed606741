from app.core.config import settings
from app.core.logging import get_logger
from app.domain.gitquery import normalizer
from app.domain.gitquery.schemas import (
    SimplifiedCommit,
    SimplifiedIssue,
    SimplifiedPullRequest,
)
from app.infra.providers import http

logger = get_logger(__name__)

JSON_MEDIA_TYPE = "application/vnd.github.v3+json"
DIFF_MEDIA_TYPE = "application/vnd.github.v3.diff"


class GitHubClient:
    """GitHub REST v3 클라이언트"""

    name = "GitHub"
    token_env = "GITHUB_TOKEN"

    def __init__(
        self,
        token: str | None = None,
        api_base: str | None = None,
        page_size: int | None = None,
    ):
        self._token = settings.github_token if token is None else token
        self._api_base = (api_base or settings.github_api_base).rstrip("/")
        self._page_size = page_size or settings.provider_page_size

    def _get_headers(self, accept: str = JSON_MEDIA_TYPE) -> dict[str, str]:
        """GitHub API 요청 헤더 생성 - PAT가 있으면 token 방식 인증"""
        headers = {"Accept": accept}
        if self._token:
            headers["Authorization"] = f"token {self._token}"
        return headers

    def _repo_url(self, owner: str, repo: str) -> str:
        return f"{self._api_base}/repos/{owner}/{repo}"

    async def _get(self, url: str, kind: str, params: dict | None = None, accept: str = JSON_MEDIA_TYPE):
        return await http.get(
            url,
            provider=self.name,
            kind=kind,
            token_env=self.token_env,
            headers=self._get_headers(accept),
            params=params,
        )

    async def list_commits(self, owner: str, repo: str) -> list[SimplifiedCommit]:
        """레포지토리 최근 커밋 조회

        Args:
            owner: 레포지토리 소유자
            repo: 레포지토리 이름

        Returns:
            커밋 목록, 최신순
        """
        response = await self._get(
            f"{self._repo_url(owner, repo)}/commits",
            "commits",
            params={"per_page": self._page_size},
        )
        commits = [normalizer.github_commit(item) for item in response.json()]

        logger.info("커밋 조회 완료 repo=%s/%s count=%d", owner, repo, len(commits))
        return commits

    async def list_open_issues(self, owner: str, repo: str) -> list[SimplifiedIssue]:
        """열린 이슈 조회 - /issues 응답에 섞인 PR은 제외"""
        response = await self._get(
            f"{self._repo_url(owner, repo)}/issues",
            "issues",
            params={
                "state": "open",
                "per_page": self._page_size,
                "sort": "created",
                "direction": "desc",
            },
        )
        issues = normalizer.github_issues(response.json())

        logger.info("이슈 조회 완료 repo=%s/%s count=%d", owner, repo, len(issues))
        return issues

    async def list_open_pull_requests(self, owner: str, repo: str) -> list[SimplifiedPullRequest]:
        """열린 PR 조회"""
        response = await self._get(
            f"{self._repo_url(owner, repo)}/pulls",
            "pull requests",
            params={
                "state": "open",
                "per_page": self._page_size,
                "sort": "created",
                "direction": "desc",
            },
        )
        pulls = [normalizer.github_pull_request(item) for item in response.json()]

        logger.info("PR 조회 완료 repo=%s/%s count=%d", owner, repo, len(pulls))
        return pulls

    async def fetch_commit_diff(self, owner: str, repo: str, sha: str) -> str:
        """커밋 diff 조회 - diff 미디어 타입으로 원문 텍스트 수신"""
        response = await self._get(
            f"{self._repo_url(owner, repo)}/commits/{sha}",
            "commit diff",
            accept=DIFF_MEDIA_TYPE,
        )

        logger.info("커밋 diff 조회 완료 repo=%s/%s sha=%s", owner, repo, sha[:7])
        return response.text
