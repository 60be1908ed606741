import re

from app.domain.gitquery.schemas import ParsedRepository, RepoSource

EMPTY_URL_MESSAGE = "Repository URL cannot be empty."
INVALID_URL_MESSAGE = (
    "Invalid repository URL. Use format like https://github.com/owner/repo, "
    "https://gitlab.com/namespace/project, or owner/repo (for GitHub)."
)

GITHUB_URL_PATTERN = re.compile(
    r"(?:https?://)?(?:www\.)?github\.com/([^/]+)/([^/]+?)(?:\.git|/)*",
    re.IGNORECASE,
)
# GitLab 프로젝트 경로는 서브그룹을 포함할 수 있음: group/subgroup/project
GITLAB_URL_PATTERN = re.compile(
    r"(?:https?://)?(?:www\.)?gitlab\.com/([^/]+)/(.+?)(?:\.git|/)*",
    re.IGNORECASE,
)
SHORTHAND_PATTERN = re.compile(r"([^/]+)/([^/]+?)(?:\.git)?", re.IGNORECASE)

EXPLAIN_COMMIT_PATTERN = re.compile(r"explain commit\s+([0-9a-fA-F]{7,40})\s*", re.IGNORECASE)

CANONICAL_HOSTS = {
    RepoSource.GITHUB: "https://github.com",
    RepoSource.GITLAB: "https://gitlab.com",
}


def parse_repository_url(url: str | None) -> ParsedRepository:
    """레포지토리 URL을 owner, repo, source로 분류

    GitHub 전체 URL, GitLab 전체 URL, owner/repo 축약형 순서로 매칭한다.
    축약형은 GitHub로 간주한다.

    Args:
        url: 사용자가 입력한 레포지토리 URL

    Returns:
        파싱 결과, 실패 시 source=invalid와 에러 메시지
    """
    if not url or not url.strip():
        return ParsedRepository(source=RepoSource.INVALID, error=EMPTY_URL_MESSAGE)

    trimmed = url.strip()

    match = GITHUB_URL_PATTERN.fullmatch(trimmed)
    if match:
        return ParsedRepository(owner=match.group(1), repo=match.group(2), source=RepoSource.GITHUB)

    match = GITLAB_URL_PATTERN.fullmatch(trimmed)
    if match:
        return ParsedRepository(
            owner=match.group(1),
            repo=match.group(2).rstrip("/"),
            source=RepoSource.GITLAB,
        )

    lowered = trimmed.lower()
    match = SHORTHAND_PATTERN.fullmatch(trimmed)
    if (
        match
        and "://" not in trimmed
        and "github.com" not in lowered
        and "gitlab.com" not in lowered
    ):
        return ParsedRepository(owner=match.group(1), repo=match.group(2), source=RepoSource.GITHUB)

    return ParsedRepository(source=RepoSource.INVALID, error=INVALID_URL_MESSAGE)


def canonical_url(parsed: ParsedRepository) -> str:
    """파싱 결과로 정규화된 https URL 생성

    Raises:
        ValueError: invalid 결과인 경우
    """
    if not parsed.is_valid:
        raise ValueError(f"유효하지 않은 레포지토리: {parsed.error}")
    return f"{CANONICAL_HOSTS[parsed.source]}/{parsed.owner}/{parsed.repo}"


def commit_url(parsed: ParsedRepository, sha: str) -> str:
    """커밋 웹 페이지 URL"""
    base = canonical_url(parsed)
    if parsed.source == RepoSource.GITLAB:
        return f"{base}/-/commit/{sha}"
    return f"{base}/commit/{sha}"


def match_explain_commit(query: str | None) -> str | None:
    """'explain commit <sha>' 형태의 질의에서 SHA 추출

    Returns:
        7~40자리 16진수 SHA, 해당 형태가 아니면 None
    """
    if not query:
        return None
    match = EXPLAIN_COMMIT_PATTERN.fullmatch(query.strip())
    return match.group(1) if match else None
