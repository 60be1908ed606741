from app.domain.gitquery.schemas.base import (
    ActionResult,
    AnswerResult,
    ParsedRepository,
    RepoSource,
)
from app.domain.gitquery.schemas.flows import (
    AnswerQueryInput,
    AnswerQueryOutput,
    CommitSummaryInput,
    CommitSummaryOutput,
    ExplainDiffInput,
    ExplainDiffOutput,
    SuggestInsightsInput,
    SuggestInsightsOutput,
)
from app.domain.gitquery.schemas.records import (
    SimplifiedCommit,
    SimplifiedIssue,
    SimplifiedPullRequest,
)
from app.domain.gitquery.schemas.state import QueryState

__all__ = [
    "RepoSource",
    "ParsedRepository",
    "AnswerResult",
    "ActionResult",
    "SimplifiedCommit",
    "SimplifiedIssue",
    "SimplifiedPullRequest",
    "AnswerQueryInput",
    "AnswerQueryOutput",
    "CommitSummaryInput",
    "CommitSummaryOutput",
    "SuggestInsightsInput",
    "SuggestInsightsOutput",
    "ExplainDiffInput",
    "ExplainDiffOutput",
    "QueryState",
]
