"""프로바이더별 원본 JSON을 공통 레코드와 프롬프트용 텍스트로 변환

GitHub/GitLab 응답 형태의 차이는 이 모듈에서 모두 흡수한다.
"""

from collections.abc import Iterable
from datetime import datetime

from app.domain.gitquery.schemas import (
    SimplifiedCommit,
    SimplifiedIssue,
    SimplifiedPullRequest,
)

UNKNOWN_USER = "Unknown"
RECORD_SEPARATOR = "\n\n"
NO_DATA_SENTINEL = (
    "No specific data (commits, issues, or pull requests) could be retrieved for the "
    "repository. The AI will attempt to answer based on general knowledge if possible."
)

# GitLab은 열린 상태를 "opened"로 표기
GITLAB_STATE_MAP = {"opened": "open"}


def _first_line(message: str | None) -> str:
    return (message or "").split("\n", 1)[0].strip()


def _first_non_empty(*values: str | None) -> str:
    for value in values:
        if value:
            return value
    return UNKNOWN_USER


def _label_names(labels: Iterable | None) -> tuple[str, ...]:
    """GitHub는 label 객체, GitLab은 문자열 목록"""
    names = []
    for label in labels or []:
        if isinstance(label, dict):
            name = label.get("name")
        else:
            name = label
        if name:
            names.append(str(name))
    return tuple(names)


def _format_date(value: str | None) -> str:
    if not value:
        return "N/A"
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return value


# --- GitHub ---


def github_commit(raw: dict) -> SimplifiedCommit:
    commit = raw.get("commit") or {}
    commit_author = commit.get("author") or {}
    api_user = raw.get("author") or {}
    return SimplifiedCommit(
        sha=raw["sha"],
        message=_first_line(commit.get("message")),
        author=_first_non_empty(commit_author.get("name"), api_user.get("login")),
        date=commit_author.get("date"),
        url=raw.get("html_url") or "",
    )


def github_issue(raw: dict) -> SimplifiedIssue:
    return SimplifiedIssue(
        number=raw["number"],
        title=raw.get("title") or "",
        user=_first_non_empty((raw.get("user") or {}).get("login")),
        state=raw.get("state") or "",
        created_at=raw.get("created_at"),
        labels=_label_names(raw.get("labels")),
        url=raw.get("html_url") or "",
    )


def github_pull_request(raw: dict) -> SimplifiedPullRequest:
    return SimplifiedPullRequest(**github_issue(raw).model_dump())


def github_issues(raw_items: list[dict]) -> list[SimplifiedIssue]:
    """GitHub issues 응답에서 PR을 제외하고 변환

    GitHub의 /issues 엔드포인트는 PR도 함께 반환한다.
    """
    return [github_issue(item) for item in raw_items if not item.get("pull_request")]


# --- GitLab ---


def gitlab_commit(raw: dict) -> SimplifiedCommit:
    return SimplifiedCommit(
        sha=raw["id"],
        message=_first_line(raw.get("message") or raw.get("title")),
        author=_first_non_empty(raw.get("author_name"), raw.get("committer_name")),
        date=raw.get("committed_date") or raw.get("created_at"),
        url=raw.get("web_url") or "",
    )


def gitlab_issue(raw: dict) -> SimplifiedIssue:
    state = raw.get("state") or ""
    return SimplifiedIssue(
        number=raw["iid"],
        title=raw.get("title") or "",
        user=_first_non_empty((raw.get("author") or {}).get("username")),
        state=GITLAB_STATE_MAP.get(state, state),
        created_at=raw.get("created_at"),
        labels=_label_names(raw.get("labels")),
        url=raw.get("web_url") or "",
    )


def gitlab_merge_request(raw: dict) -> SimplifiedPullRequest:
    return SimplifiedPullRequest(**gitlab_issue(raw).model_dump())


def gitlab_diff(file_diffs: list[dict]) -> str:
    """GitLab 파일별 diff 객체를 하나의 unified diff 문자열로 병합"""
    parts = []
    for item in file_diffs:
        old_path = item.get("old_path") or item.get("new_path") or ""
        new_path = item.get("new_path") or old_path
        old_header = "/dev/null" if item.get("new_file") else f"a/{old_path}"
        new_header = "/dev/null" if item.get("deleted_file") else f"b/{new_path}"
        parts.append(f"--- {old_header}\n+++ {new_header}\n{item.get('diff') or ''}".rstrip("\n"))
    return "\n".join(parts)


# --- 텍스트 포맷 ---


def format_commit(commit: SimplifiedCommit) -> str:
    return (
        f"Commit SHA: {commit.sha[:7]}\n"
        f"Author: {commit.author}\n"
        f"Date: {_format_date(commit.date)}\n"
        f"Message: {commit.message}\n"
        f"URL: {commit.url}\n"
        "---"
    )


def _format_ticket(prefix: str, item: SimplifiedIssue) -> str:
    labels = ", ".join(item.labels) or "None"
    return (
        f"{prefix} #{item.number}: {item.title}\n"
        f"User: {item.user}\n"
        f"State: {item.state}\n"
        f"Created: {_format_date(item.created_at)}\n"
        f"Labels: {labels}\n"
        f"URL: {item.url}\n"
        "---"
    )


def format_issue(issue: SimplifiedIssue) -> str:
    return _format_ticket("Issue", issue)


def format_pull_request(pull: SimplifiedPullRequest) -> str:
    return _format_ticket("PR", pull)


def format_commits(commits: list[SimplifiedCommit]) -> str:
    return RECORD_SEPARATOR.join(format_commit(c) for c in commits)


def format_issues(issues: list[SimplifiedIssue]) -> str:
    return RECORD_SEPARATOR.join(format_issue(i) for i in issues)


def format_pull_requests(pulls: list[SimplifiedPullRequest]) -> str:
    return RECORD_SEPARATOR.join(format_pull_request(p) for p in pulls)


def build_query_context(
    commits: str | None = None,
    issues: str | None = None,
    pulls: str | None = None,
) -> str:
    """섹션별 텍스트를 COMMITS, ISSUES, PULL REQUESTS 순서로 합침

    비어 있는 섹션은 생략하고, 모두 비어 있으면 대체 문구를 반환한다.
    """
    sections = [
        ("COMMITS", commits),
        ("ISSUES", issues),
        ("PULL REQUESTS", pulls),
    ]
    parts = [f"{title}:\n{body}" for title, body in sections if body and body.strip()]
    if not parts:
        return NO_DATA_SENTINEL
    return "\n\n".join(parts)
