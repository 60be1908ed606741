"""
프로바이더 응답 캐시

- 키: (source, kind, owner, repo) -> "github:commits:owner/repo"
- 백엔드: 메모리(dict + TTL), Redis(SETEX)
- 락 없이 조회 후 저장 - 경합 시 중복 조회만 발생
"""

import time
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import NamedTuple

import redis.asyncio as redis

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

CACHE_PREFIX = "gitprose"


class CacheKey(NamedTuple):
    kind: str
    owner: str
    repo: str
    source: str = "github"

    def render(self) -> str:
        return f"{CACHE_PREFIX}:{self.source}:{self.kind}:{self.owner}/{self.repo}"


class ResponseCache(ABC):
    """응답 캐시 추상 클래스"""

    @abstractmethod
    async def get(self, key: CacheKey) -> str | None:
        pass

    @abstractmethod
    async def set(self, key: CacheKey, value: str) -> None:
        pass

    async def close(self) -> None:
        """백엔드 연결 종료"""


class MemoryCache(ResponseCache):
    """프로세스 메모리 캐시 - 만료 항목은 조회에서 제외하고 쓰기 시 정리"""

    def __init__(
        self,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl = settings.cache_ttl_seconds if ttl_seconds is None else ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, str]] = {}

    async def get(self, key: CacheKey) -> str | None:
        entry = self._entries.get(key.render())
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key.render()]
            return None
        return value

    async def set(self, key: CacheKey, value: str) -> None:
        now = self._clock()
        self._purge_expired(now)
        self._entries[key.render()] = (now + self._ttl, value)

    def _purge_expired(self, now: float) -> None:
        expired = [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]
        for k in expired:
            del self._entries[k]

    def __len__(self) -> int:
        return len(self._entries)


class RedisCache(ResponseCache):
    """Redis 캐시 - 만료는 Redis TTL에 위임"""

    def __init__(self, client: redis.Redis, ttl_seconds: int | None = None):
        self._client = client
        self._ttl = settings.cache_ttl_seconds if ttl_seconds is None else ttl_seconds

    @classmethod
    def from_url(cls, url: str, ttl_seconds: int | None = None) -> "RedisCache":
        return cls(redis.from_url(url, decode_responses=True), ttl_seconds)

    async def get(self, key: CacheKey) -> str | None:
        value = await self._client.get(key.render())
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, key: CacheKey, value: str) -> None:
        await self._client.set(key.render(), value, ex=self._ttl)

    async def close(self) -> None:
        await self._client.aclose()


def build_cache() -> ResponseCache:
    """설정에 맞는 캐시 백엔드 생성"""
    backend = settings.cache_backend.lower()
    if backend == "memory":
        logger.info("메모리 캐시 초기화 ttl=%d", settings.cache_ttl_seconds)
        return MemoryCache()
    if backend == "redis":
        logger.info("Redis 캐시 초기화 ttl=%d", settings.cache_ttl_seconds)
        return RedisCache.from_url(settings.redis_url)
    raise ValueError(f"지원하지 않는 캐시 백엔드: {settings.cache_backend}")


async def get_or_fetch(
    cache: ResponseCache | None,
    key: CacheKey,
    fetch: Callable[[], Awaitable[str]],
) -> str:
    """캐시에 있으면 반환, 없으면 조회 후 저장

    빈 결과는 저장하지 않는다.
    """
    if cache is not None:
        cached = await cache.get(key)
        if cached is not None:
            logger.debug("캐시 적중 key=%s", key.render())
            return cached

    value = await fetch()

    if cache is not None and value:
        await cache.set(key, value)
    return value
