from urllib.parse import quote

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


def encode_project_id(namespace: str, project: str) -> str:
    """namespace/project 경로를 하나의 path segment로 인코딩

    >>> encode_project_id("group", "sub/project")
    'group%2Fsub%2Fproject'
    """
    return quote(f"{namespace}/{project}", safe="")


class GitLabClient:
    """GitLab REST v4 클라이언트"""

    name = "GitLab"
    token_env = "GITLAB_TOKEN"

    def __init__(
        self,
        token: str | None = None,
        api_base: str | None = None,
        page_size: int | None = None,
    ):
        self._token = settings.gitlab_token if token is None else token
        self._api_base = (api_base or settings.gitlab_api_base).rstrip("/")
        self._page_size = page_size or settings.provider_page_size

    def _get_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["PRIVATE-TOKEN"] = self._token
        return headers

    def _project_url(self, namespace: str, project: str) -> str:
        return f"{self._api_base}/projects/{encode_project_id(namespace, project)}"

    async def _get(self, url: str, kind: str, params: dict | None = None):
        return await http.get(
            url,
            provider=self.name,
            kind=kind,
            token_env=self.token_env,
            headers=self._get_headers(),
            params=params,
        )

    async def list_commits(self, owner: str, repo: str) -> list[SimplifiedCommit]:
        response = await self._get(
            f"{self._project_url(owner, repo)}/repository/commits",
            "commits",
            params={"per_page": self._page_size},
        )
        commits = [normalizer.gitlab_commit(item) for item in response.json()]

        logger.info("커밋 조회 완료 repo=%s/%s count=%d", owner, repo, len(commits))
        return commits

    async def list_open_issues(self, owner: str, repo: str) -> list[SimplifiedIssue]:
        response = await self._get(
            f"{self._project_url(owner, repo)}/issues",
            "issues",
            params={
                "state": "opened",
                "per_page": self._page_size,
                "order_by": "created_at",
                "sort": "desc",
            },
        )
        issues = [normalizer.gitlab_issue(item) for item in response.json()]

        logger.info("이슈 조회 완료 repo=%s/%s count=%d", owner, repo, len(issues))
        return issues

    async def list_open_pull_requests(self, owner: str, repo: str) -> list[SimplifiedPullRequest]:
        """열린 merge request 조회"""
        response = await self._get(
            f"{self._project_url(owner, repo)}/merge_requests",
            "merge requests",
            params={
                "state": "opened",
                "per_page": self._page_size,
                "order_by": "created_at",
                "sort": "desc",
            },
        )
        pulls = [normalizer.gitlab_merge_request(item) for item in response.json()]

        logger.info("MR 조회 완료 repo=%s/%s count=%d", owner, repo, len(pulls))
        return pulls

    async def fetch_commit_diff(self, owner: str, repo: str, sha: str) -> str:
        """커밋 diff 조회 - 파일별 diff 배열을 하나의 문자열로 병합"""
        response = await self._get(
            f"{self._project_url(owner, repo)}/repository/commits/{sha}/diff",
            "commit diff",
        )
        file_diffs = response.json()

        logger.info(
            "커밋 diff 조회 완료 repo=%s/%s sha=%s files=%d", owner, repo, sha[:7], len(file_diffs)
        )
        return normalizer.gitlab_diff(file_diffs)
