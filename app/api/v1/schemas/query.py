"""질의 API 스키마."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class AnswerRequest(_CamelModel):
    """질의 응답 요청."""

    repository_url: str = Field(alias="repositoryUrl")
    query: str


class AnswerResponse(_CamelModel):
    """질의 응답 결과."""

    answer: str
    relevant_links: list[str] = Field(alias="relevantLinks")
    kind: str = "answer"


class ExplainCommitRequest(_CamelModel):
    """커밋 설명 요청."""

    repository_url: str = Field(alias="repositoryUrl")
    sha: str

    @field_validator("sha")
    @classmethod
    def strip_sha(cls, v: str) -> str:
        return v.strip()


class ExplainCommitResponse(_CamelModel):
    """커밋 설명 결과."""

    explanation: str
    commit_url: str = Field(alias="commitUrl")


class RepositoryRequest(_CamelModel):
    """레포지토리 URL만 받는 요청."""

    repository_url: str = Field(alias="repositoryUrl")


class SuggestionsResponse(_CamelModel):
    """추천 질문 결과."""

    questions: list[str]


class CommitSummaryResponse(_CamelModel):
    """커밋 요약 결과."""

    summary: str
