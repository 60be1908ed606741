from typing import Protocol

from app.domain.gitquery.schemas import (
    SimplifiedCommit,
    SimplifiedIssue,
    SimplifiedPullRequest,
)


class GitProvider(Protocol):
    """Git 호스팅 프로바이더 조회 인터페이스"""

    name: str
    token_env: str

    async def list_commits(self, owner: str, repo: str) -> list[SimplifiedCommit]:
        """최근 커밋 목록 (최신순)"""
        ...

    async def list_open_issues(self, owner: str, repo: str) -> list[SimplifiedIssue]:
        """열린 이슈 목록 (최신순, PR 제외)"""
        ...

    async def list_open_pull_requests(self, owner: str, repo: str) -> list[SimplifiedPullRequest]:
        """열린 PR/MR 목록 (최신순)"""
        ...

    async def fetch_commit_diff(self, owner: str, repo: str, sha: str) -> str:
        """커밋의 unified diff 텍스트"""
        ...
