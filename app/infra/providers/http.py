"""프로바이더 공용 HTTP 호출 및 에러 변환"""

import httpx

from app.core.config import settings
from app.core.exceptions import ProviderHttpError, TransportError
from app.core.logging import get_logger

logger = get_logger(__name__)

RATE_LIMIT_PHRASE = "rate limit"

_client = httpx.AsyncClient(timeout=settings.provider_timeout)


async def close_client():
    """httpx 클라이언트 종료"""
    await _client.aclose()


def _extract_error_message(response: httpx.Response, kind: str) -> str:
    """에러 응답 본문에서 사람이 읽을 메시지 추출

    GitHub는 {"message": ...}, GitLab은 {"message": ...} 또는 {"error": ...} 형태
    """
    fallback = f"Failed to fetch {kind}"
    try:
        data = response.json()
    except ValueError:
        return fallback

    if not isinstance(data, dict):
        return fallback

    message = data.get("message") or data.get("error_description") or data.get("error")
    if not message:
        return fallback
    return str(message)


def is_rate_limited(status: int, message: str) -> bool:
    if status == 429:
        return True
    return status == 403 and RATE_LIMIT_PHRASE in message.lower()


def rate_limit_guidance(provider: str, token_env: str, token_configured: bool) -> str:
    """rate limit 에러에 덧붙일 안내 문구"""
    if token_configured:
        return (
            f"{provider} API rate limit reached even with the configured {token_env} token. "
            "Wait for the limit to reset or use a token with a higher quota."
        )
    return (
        f"{provider} API rate limit exceeded for unauthenticated requests. "
        f"Authenticate by setting the {token_env} environment variable to a personal "
        "access token to get a higher rate limit."
    )


def build_http_error(
    response: httpx.Response,
    provider: str,
    kind: str,
    token_env: str,
    token_configured: bool,
) -> ProviderHttpError:
    """2xx 이외 응답을 ProviderHttpError로 변환"""
    status = response.status_code
    message = _extract_error_message(response, kind)
    rate_limited = is_rate_limited(status, message)

    text = f"Failed to fetch {kind} from {provider} ({status}): {message}"
    if rate_limited:
        text = f"{text} {rate_limit_guidance(provider, token_env, token_configured)}"

    logger.warning(
        "프로바이더 응답 오류 provider=%s kind=%s status=%d rate_limited=%s",
        provider,
        kind,
        status,
        rate_limited,
    )
    return ProviderHttpError(provider, status, text, rate_limited=rate_limited)


async def get(
    url: str,
    *,
    provider: str,
    kind: str,
    token_env: str,
    headers: dict[str, str],
    params: dict | None = None,
) -> httpx.Response:
    """GET 요청 후 성공 응답 반환

    Raises:
        ProviderHttpError: 2xx 이외 응답
        TransportError: DNS, 타임아웃, 연결 끊김 등
    """
    try:
        response = await _client.get(url, headers=headers, params=params)
    except httpx.RequestError as e:
        logger.warning(
            "프로바이더 요청 실패 provider=%s kind=%s error=%s", provider, kind, type(e).__name__
        )
        raise TransportError(detail=f"{provider} {kind}: {type(e).__name__}") from e

    if not 200 <= response.status_code < 300:
        raise build_http_error(
            response,
            provider,
            kind,
            token_env=token_env,
            token_configured=_has_auth(headers),
        )
    return response


def _has_auth(headers: dict[str, str]) -> bool:
    return "Authorization" in headers or "PRIVATE-TOKEN" in headers
