from app.api.v1.schemas.query import (
    AnswerRequest,
    AnswerResponse,
    CommitSummaryResponse,
    ExplainCommitRequest,
    ExplainCommitResponse,
    RepositoryRequest,
    SuggestionsResponse,
)

__all__ = [
    "AnswerRequest",
    "AnswerResponse",
    "ExplainCommitRequest",
    "ExplainCommitResponse",
    "RepositoryRequest",
    "SuggestionsResponse",
    "CommitSummaryResponse",
]
