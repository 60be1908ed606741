from app.core.logging import get_logger
from app.domain.gitquery.schemas import RepoSource
from app.infra.providers.base import GitProvider
from app.infra.providers.github import GitHubClient
from app.infra.providers.gitlab import GitLabClient

logger = get_logger(__name__)

PROVIDERS: dict[RepoSource, type] = {
    RepoSource.GITHUB: GitHubClient,
    RepoSource.GITLAB: GitLabClient,
}


def get_provider(source: RepoSource) -> GitProvider:
    """source 태그에 맞는 프로바이더 클라이언트 반환

    Raises:
        ValueError: 조회 가능한 프로바이더가 아닌 경우
    """
    provider_cls = PROVIDERS.get(source)
    if provider_cls is None:
        raise ValueError(f"지원하지 않는 프로바이더: {source.value}")
    return provider_cls()
