from typing import Literal

from pydantic import TypeAdapter

from app.core.logging import get_logger
from app.domain.gitquery import normalizer
from app.domain.gitquery.cache import CacheKey, ResponseCache, get_or_fetch
from app.domain.gitquery.schemas import ParsedRepository, SimplifiedCommit
from app.infra.providers import GitProvider, get_provider

logger = get_logger(__name__)

SectionKind = Literal["commits", "issues", "pulls"]

_commits_adapter = TypeAdapter(list[SimplifiedCommit])


def _cache_key(kind: str, repository: ParsedRepository) -> CacheKey:
    return CacheKey(
        kind=kind,
        owner=repository.owner,
        repo=repository.repo,
        source=repository.source.value,
    )


async def _fetch_section(provider: GitProvider, kind: SectionKind, repository: ParsedRepository) -> str:
    owner, repo = repository.owner, repository.repo
    if kind == "commits":
        return normalizer.format_commits(await provider.list_commits(owner, repo))
    if kind == "issues":
        return normalizer.format_issues(await provider.list_open_issues(owner, repo))
    return normalizer.format_pull_requests(await provider.list_open_pull_requests(owner, repo))


async def collect_section(
    kind: SectionKind,
    repository: ParsedRepository,
    cache: ResponseCache | None = None,
) -> str:
    """커밋/이슈/PR 중 한 섹션의 프롬프트용 텍스트 조회

    Args:
        kind: 조회할 섹션
        repository: 파싱된 레포지토리
        cache: 응답 캐시, None이면 항상 조회

    Returns:
        레코드별 텍스트 블록을 이어 붙인 문자열, 데이터가 없으면 빈 문자열
    """
    provider = get_provider(repository.source)

    async def fetch() -> str:
        return await _fetch_section(provider, kind, repository)

    text = await get_or_fetch(cache, _cache_key(kind, repository), fetch)
    logger.info("섹션 수집 완료 kind=%s repo=%s chars=%d", kind, repository.label, len(text))
    return text


async def collect_commit_diff(
    repository: ParsedRepository,
    sha: str,
    cache: ResponseCache | None = None,
) -> str:
    """커밋 diff 조회 - SHA 단위로 캐시"""
    provider = get_provider(repository.source)

    async def fetch() -> str:
        return await provider.fetch_commit_diff(repository.owner, repository.repo, sha)

    return await get_or_fetch(cache, _cache_key(f"diff:{sha.lower()}", repository), fetch)


async def collect_commit_data(
    repository: ParsedRepository,
    cache: ResponseCache | None = None,
) -> str:
    """커밋 요약 flow 입력용 JSON 문자열 조회"""
    provider = get_provider(repository.source)

    async def fetch() -> str:
        commits = await provider.list_commits(repository.owner, repository.repo)
        return _commits_adapter.dump_json(commits).decode("utf-8")

    return await get_or_fetch(cache, _cache_key("commits-json", repository), fetch)
