"""Data models for the notification core.

Everything here is immutable: a head, an outcome and a payload are computed
once per ``notify`` call and only read afterwards.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeAlias

from ..config.models import NotificationTarget, PrCommentBehavior


class HeadKind(str, Enum):
    """What the repository HEAD points at."""

    BRANCH = "branch"
    COMMIT = "commit"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class RepositoryHead:
    """Current HEAD of the working repository."""

    kind: HeadKind
    branch_name: str | None = None
    commit_id: str | None = None

    @classmethod
    def branch(cls, name: str, commit_id: str) -> "RepositoryHead":
        return cls(HeadKind.BRANCH, branch_name=name, commit_id=commit_id)

    @classmethod
    def commit(cls, commit_id: str) -> "RepositoryHead":
        return cls(HeadKind.COMMIT, commit_id=commit_id)

    @classmethod
    def unresolved(cls) -> "RepositoryHead":
        return cls(HeadKind.UNRESOLVED)

    @property
    def is_branch(self) -> bool:
        return self.kind is HeadKind.BRANCH


class CommitState(str, Enum):
    """Commit status states reported for a comparison."""

    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class ComparisonCounts:
    """Number of items in each comparison category."""

    failed: int = 0
    new: int = 0
    deleted: int = 0
    passed: int = 0

    def __post_init__(self) -> None:
        for name in ("failed", "new", "deleted", "passed"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} count must be non-negative")


@dataclass(frozen=True)
class ComparisonResult:
    """Pre-computed result of a visual regression run.

    Only the size of each item list matters to the notifier; the items
    themselves (usually image file names) are carried for logging.
    """

    failed_items: tuple[Any, ...] = ()
    new_items: tuple[Any, ...] = ()
    deleted_items: tuple[Any, ...] = ()
    passed_items: tuple[Any, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ComparisonResult":
        """Build a result from reg-suit's ``out.json`` layout.

        Accepts both ``failedItems`` and ``failed_items`` style keys; a missing
        list counts as empty.

        Raises:
            ValueError: If an item collection is not a list or tuple
        """

        def items(camel: str, snake: str) -> tuple[Any, ...]:
            value: Sequence[Any] | None = data.get(camel, data.get(snake))
            if value is None:
                return ()
            if not isinstance(value, (list, tuple)):
                raise ValueError(
                    f"{camel} must be a list, not {type(value).__name__}"
                )
            return tuple(value)

        return cls(
            failed_items=items("failedItems", "failed_items"),
            new_items=items("newItems", "new_items"),
            deleted_items=items("deletedItems", "deleted_items"),
            passed_items=items("passedItems", "passed_items"),
        )

    def counts(self) -> ComparisonCounts:
        return ComparisonCounts(
            failed=len(self.failed_items),
            new=len(self.new_items),
            deleted=len(self.deleted_items),
            passed=len(self.passed_items),
        )


@dataclass(frozen=True)
class ComparisonOutcome:
    """Binary verdict derived from comparison counts."""

    state: CommitState
    description: str
    counts: ComparisonCounts


@dataclass(frozen=True)
class PullRequestRef:
    """Minimal reference to an open pull request."""

    number: int
    title: str = ""
    html_url: str | None = None


@dataclass(frozen=True)
class CommentPayload:
    """Everything needed to render a pull request comment."""

    target: NotificationTarget
    counts: ComparisonCounts
    head_commit_id: str
    branch_name: str | None = None
    report_url: str | None = None
    behavior: PrCommentBehavior = PrCommentBehavior.DEFAULT
    short_description: bool = False
    config_id: str = ""


class RemoteAction(str, Enum):
    """Remote steps whose failures are collected."""

    COMMIT_STATUS = "commit_status"
    PULL_REQUEST_LOOKUP = "pull_request_lookup"
    PULL_REQUEST_COMMENT = "pull_request_comment"


@dataclass(frozen=True)
class RemoteApiError:
    """GitHub answered with a structured error."""

    action: RemoteAction
    message: str
    status_code: int | None = None


@dataclass(frozen=True)
class UnknownError:
    """Any other failure of a remote call."""

    action: RemoteAction
    cause: BaseException

    @property
    def message(self) -> str:
        return str(self.cause) or type(self.cause).__name__


RemoteFailure: TypeAlias = RemoteApiError | UnknownError


@dataclass
class NotifyResult:
    """Outcome of a single ``notify`` call."""

    failures: list[RemoteFailure] = field(default_factory=list)
    head: RepositoryHead | None = None
    outcome: ComparisonOutcome | None = None
    status_updated: bool = False
    commented_pull_request: int | None = None
    comment_body: str | None = None
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        """True when no remote action failed."""
        return not self.failures
