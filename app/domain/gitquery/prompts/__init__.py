from app.domain.gitquery.prompts.answer import ANSWER_QUERY_HUMAN, ANSWER_QUERY_SYSTEM
from app.domain.gitquery.prompts.diff import EXPLAIN_DIFF_HUMAN, EXPLAIN_DIFF_SYSTEM
from app.domain.gitquery.prompts.insights import (
    SUGGEST_INSIGHTS_HUMAN,
    SUGGEST_INSIGHTS_SYSTEM,
)
from app.domain.gitquery.prompts.summary import (
    COMMIT_SUMMARY_HUMAN,
    COMMIT_SUMMARY_SYSTEM,
)

__all__ = [
    "ANSWER_QUERY_SYSTEM",
    "ANSWER_QUERY_HUMAN",
    "COMMIT_SUMMARY_SYSTEM",
    "COMMIT_SUMMARY_HUMAN",
    "SUGGEST_INSIGHTS_SYSTEM",
    "SUGGEST_INSIGHTS_HUMAN",
    "EXPLAIN_DIFF_SYSTEM",
    "EXPLAIN_DIFF_HUMAN",
]
