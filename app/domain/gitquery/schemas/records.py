from pydantic import BaseModel, ConfigDict


class SimplifiedCommit(BaseModel):
    """프로바이더 공통 커밋 정보"""

    model_config = ConfigDict(frozen=True)

    sha: str
    message: str
    author: str
    date: str | None = None
    url: str


class SimplifiedIssue(BaseModel):
    """프로바이더 공통 이슈 정보"""

    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    user: str
    state: str
    created_at: str | None = None
    labels: tuple[str, ...] = ()
    url: str


class SimplifiedPullRequest(SimplifiedIssue):
    """프로바이더 공통 PR/MR 정보 - merge 여부는 state로만 표현"""
