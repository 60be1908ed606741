from app.infra.providers.base import GitProvider
from app.infra.providers.factory import get_provider
from app.infra.providers.github import GitHubClient
from app.infra.providers.gitlab import GitLabClient, encode_project_id
from app.infra.providers.http import close_client

__all__ = [
    "GitProvider",
    "GitHubClient",
    "GitLabClient",
    "get_provider",
    "encode_project_id",
    "close_client",
]
