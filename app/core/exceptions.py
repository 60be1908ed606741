from enum import Enum

from fastapi import Request
from fastapi.responses import JSONResponse

from app.core.config import settings

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


class ErrorCode(str, Enum):
    """에러 코드 열거형"""

    INVALID_INPUT = "INVALID_INPUT"
    UNSUPPORTED_PROVIDER = "UNSUPPORTED_PROVIDER"
    PROVIDER_HTTP_ERROR = "PROVIDER_HTTP_ERROR"
    PROVIDER_RATE_LIMITED = "PROVIDER_RATE_LIMITED"
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"
    LLM_ERROR = "LLM_ERROR"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    DATA_PARSE_ERROR = "DATA_PARSE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class CustomException(Exception):
    def __init__(
        self,
        status_code: int,
        error_code: ErrorCode | str,
        message: str,
        detail: str | None = None,
    ):
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.detail = detail
        super().__init__(message)


class InputError(CustomException):
    """비어 있거나 형식이 잘못된 입력 - 네트워크 호출 전에 검출"""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            status_code=400,
            error_code=ErrorCode.INVALID_INPUT,
            message=message,
            detail=detail,
        )


class UnsupportedProviderError(CustomException):
    """인식은 됐지만 끝까지 처리할 수 없는 프로바이더"""

    def __init__(self, provider: str, detail: str | None = None):
        self.provider = provider
        super().__init__(
            status_code=422,
            error_code=ErrorCode.UNSUPPORTED_PROVIDER,
            message=(
                f"{provider} URL recognized, but {provider} repositories are not "
                "supported by this deployment. Enable it in ENABLED_PROVIDERS or "
                "use a repository from a supported provider."
            ),
            detail=detail,
        )


class ProviderHttpError(CustomException):
    """Git 호스팅 프로바이더의 2xx 이외 응답"""

    def __init__(
        self,
        provider: str,
        status: int,
        message: str,
        rate_limited: bool = False,
        detail: str | None = None,
    ):
        self.provider = provider
        self.status = status
        self.rate_limited = rate_limited
        super().__init__(
            status_code=502,
            error_code=(
                ErrorCode.PROVIDER_RATE_LIMITED if rate_limited else ErrorCode.PROVIDER_HTTP_ERROR
            ),
            message=message,
            detail=detail,
        )


class SchemaValidationError(CustomException):
    """LLM 입출력이 정해진 스키마와 맞지 않음"""

    def __init__(self, flow: str, detail: str | None = None):
        self.flow = flow
        super().__init__(
            status_code=502,
            error_code=ErrorCode.SCHEMA_VALIDATION_ERROR,
            message=f"The AI response for {flow} did not match the expected format.",
            detail=detail,
        )


class LLMError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=502,
            error_code=ErrorCode.LLM_ERROR,
            message="An error occurred while processing your query with AI.",
            detail=detail,
        )


class TransportError(CustomException):
    """DNS, 타임아웃, 연결 끊김 등 네트워크 레벨 실패"""

    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=504,
            error_code=ErrorCode.TRANSPORT_ERROR,
            message=UNEXPECTED_ERROR_MESSAGE,
            detail=detail,
        )


# ActionResult의 에러 코드를 HTTP 상태 코드로 변환할 때 사용
ERROR_STATUS_CODES: dict[str, int] = {
    ErrorCode.INVALID_INPUT: 400,
    ErrorCode.UNSUPPORTED_PROVIDER: 422,
    ErrorCode.PROVIDER_HTTP_ERROR: 502,
    ErrorCode.PROVIDER_RATE_LIMITED: 502,
    ErrorCode.SCHEMA_VALIDATION_ERROR: 502,
    ErrorCode.LLM_ERROR: 502,
    ErrorCode.TRANSPORT_ERROR: 504,
    ErrorCode.DATA_PARSE_ERROR: 502,
    ErrorCode.INTERNAL_ERROR: 500,
}


def register_exception_handlers(app):
    @app.exception_handler(CustomException)
    async def custom_exception_handler(request: Request, exc: CustomException):
        content = {
            "error_code": exc.error_code,
            "message": exc.message,
        }
        if exc.detail and not settings.is_production:
            content["detail"] = exc.detail

        return JSONResponse(
            status_code=exc.status_code,
            content=content,
        )
