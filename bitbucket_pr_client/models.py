"""Data models for the Bitbucket pull request API."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

MAX_KEY_SIZE_BB_API = 40  # Bitbucket rejects build status keys longer than this


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str


@dataclass(frozen=True)
class ClientIdentity:
    """Which repository the client talks to and how it reports build status."""

    owner: str
    repository_name: str
    key: str
    name: str


class BuildState(str, Enum):
    """Build states accepted by the 2.0 commit status API."""

    INPROGRESS = "INPROGRESS"
    SUCCESSFUL = "SUCCESSFUL"
    FAILED = "FAILED"

    def __str__(self) -> str:
        return self.value


class _Shape(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        frozen=True,
        coerce_numbers_to_str=True,  # 2.0 ids are numbers, callers put them in paths
    )


class User(_Shape):
    username: str | None = None
    display_name: str | None = None
    uuid: str | None = None


class Repository(_Shape):
    full_name: str | None = None
    name: str | None = None
    owner: User | None = None


class Branch(_Shape):
    name: str | None = None


class Commit(_Shape):
    hash: str | None = None


class Revision(_Shape):
    repository: Repository | None = None
    branch: Branch | None = None
    commit: Commit | None = None


class Pullrequest(_Shape):
    id: str | None = None
    title: str | None = None
    description: str | None = None
    state: str | None = None
    author: User | None = None
    source: Revision | None = None
    destination: Revision | None = None


class PullrequestResponse(_Shape):
    """Envelope of the 2.0 pull request listing."""

    pagelen: int | None = None
    page: int | None = None
    size: int | None = None
    pullrequests: list[Pullrequest] = Field(default_factory=list, alias="values")


class Comment(_Shape):
    """Pull request comment as returned by the 1.0 API."""

    # Required: error bodies ({"type": "error", ...}) must not parse as a comment
    id: int = Field(alias="comment_id")
    content: str | None = None
    author_info: User | None = None
    utc_created_on: str | None = None
    utc_last_updated: str | None = None


class Participant(_Shape):
    role: str
    approved: bool
    user: User | None = None
