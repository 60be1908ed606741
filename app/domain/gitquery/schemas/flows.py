import json
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

# 스키마 불일치는 강제 변환하지 않고 즉시 실패
_STRICT = ConfigDict(strict=True, extra="forbid", frozen=True)


class AnswerQueryInput(BaseModel):
    """질의 응답 flow 입력"""

    model_config = _STRICT

    repository_url: str = Field(min_length=1, description="The URL of the repository.")
    query: str = Field(
        min_length=1,
        description="The natural language query about the repository history, issues, or pull requests.",
    )
    relevant_data: str | None = Field(
        default=None,
        description=(
            'Relevant data with "COMMITS:", "ISSUES:", "PULL REQUESTS:" sections '
            "fetched from the hosting provider API."
        ),
    )


class AnswerQueryOutput(BaseModel):
    """질의 응답 flow 출력"""

    model_config = _STRICT

    answer: str = Field(description="The answer to the query, formatted in Markdown.")
    relevant_links: list[str] = Field(
        description="Direct links to the commits, issues, or pull requests that support the answer."
    )

    @field_validator("relevant_links")
    @classmethod
    def validate_links(cls, v: list[str]) -> list[str]:
        for link in v:
            parsed = urlparse(link)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise ValueError(f"올바른 URL이 아닙니다: {link}")
        return v


class CommitSummaryInput(BaseModel):
    """커밋 요약 flow 입력"""

    model_config = _STRICT

    repo_name: str = Field(min_length=1)
    owner_name: str = Field(min_length=1)
    commit_data: str = Field(description="A JSON string containing the commit data.")

    @field_validator("commit_data")
    @classmethod
    def validate_commit_data(cls, v: str) -> str:
        try:
            json.loads(v)
        except ValueError as e:
            raise ValueError(f"commit_data는 JSON 문자열이어야 합니다: {e}") from e
        return v


class CommitSummaryOutput(BaseModel):
    """커밋 요약 flow 출력"""

    model_config = _STRICT

    summary: str = Field(description="A human-readable summary of the latest commits.")


class SuggestInsightsInput(BaseModel):
    """추천 질문 flow 입력"""

    model_config = _STRICT

    repo_name: str = Field(min_length=1)
    owner_name: str = Field(min_length=1)


class SuggestInsightsOutput(BaseModel):
    """추천 질문 flow 출력"""

    model_config = _STRICT

    questions: list[str] = Field(
        min_length=3,
        max_length=3,
        description="Exactly three suggested questions about the repository.",
    )


class ExplainDiffInput(BaseModel):
    """커밋 diff 설명 flow 입력"""

    model_config = _STRICT

    owner_name: str = Field(min_length=1)
    repo_name: str = Field(min_length=1)
    commit_sha: str = Field(pattern=r"^[0-9a-fA-F]{7,40}$")
    diff_content: str = Field(description="The unified diff of the commit.")


class ExplainDiffOutput(BaseModel):
    """커밋 diff 설명 flow 출력"""

    model_config = _STRICT

    explanation: str = Field(
        description="Explanation of the functional impact of the diff, formatted in Markdown."
    )
