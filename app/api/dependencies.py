from fastapi import Request

from app.domain.gitquery.cache import ResponseCache


def get_response_cache(request: Request) -> ResponseCache:
    """lifespan에서 생성한 응답 캐시 반환"""
    return request.app.state.response_cache
