from enum import Enum
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, model_validator

from app.core.exceptions import CustomException, ErrorCode

T = TypeVar("T")


class RepoSource(str, Enum):
    """레포지토리 호스팅 프로바이더 태그"""

    GITHUB = "github"
    GITLAB = "gitlab"
    INVALID = "invalid"


class ParsedRepository(BaseModel):
    """URL 파싱 결과

    GitLab의 경우 owner는 최상위 namespace, repo는 서브그룹을 포함한 프로젝트 경로
    """

    model_config = ConfigDict(frozen=True)

    owner: str = ""
    repo: str = ""
    source: RepoSource
    error: str | None = None

    @model_validator(mode="after")
    def check_owner_repo(self):
        """owner/repo는 source가 invalid가 아닐 때만 비어 있지 않음"""
        has_identity = bool(self.owner) and bool(self.repo)
        if self.source == RepoSource.INVALID and (self.owner or self.repo):
            raise ValueError("invalid 결과에는 owner/repo가 없어야 합니다")
        if self.source != RepoSource.INVALID and not has_identity:
            raise ValueError("owner와 repo는 비어 있을 수 없습니다")
        return self

    @property
    def is_valid(self) -> bool:
        return self.source != RepoSource.INVALID

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def label(self) -> str:
        """로그/캐시용 식별자 (예: github:octocat/hello-world)"""
        return f"{self.source.value}:{self.full_name}"


class AnswerResult(BaseModel):
    """질의 응답 결과"""

    model_config = ConfigDict(frozen=True)

    answer: str
    relevant_links: list[str]
    kind: Literal["answer", "commit_explanation"] = "answer"


class ActionResult(BaseModel, Generic[T]):
    """레이어 경계에서 반환되는 성공/실패 결과

    data 또는 error_code/error_message 중 하나만 채워진다.
    """

    data: T | None = None
    error_code: ErrorCode | None = None
    error_message: str | None = None

    @property
    def ok(self) -> bool:
        return self.error_code is None

    @classmethod
    def success(cls, data: T) -> "ActionResult[T]":
        return cls(data=data)

    @classmethod
    def failure(cls, error_code: ErrorCode | str, error_message: str) -> "ActionResult[T]":
        return cls(error_code=error_code, error_message=error_message)

    @classmethod
    def from_exception(cls, exc: CustomException) -> "ActionResult[T]":
        return cls(error_code=exc.error_code, error_message=exc.message)
