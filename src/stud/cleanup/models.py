"""Models for branch cleanup."""

from enum import Enum

from pydantic import BaseModel, Field


class Branch(BaseModel):
    """A local branch as seen by one cleanup run."""

    name: str
    is_local: bool = True
    is_remote: bool = False
    is_current: bool = False
    is_protected: bool = False


class InventorySnapshot(BaseModel):
    """Branches known at the start of a run."""

    local_branches: set[str]
    remote_branches: set[str]
    current_branch: str

    def branch(self, name: str, protected_branches: set[str]) -> Branch:
        """Build the Branch view of a branch name.

        Args:
            name: Branch name
            protected_branches: Names that must never be deleted

        Returns:
            Branch with derived flags
        """
        return Branch(
            name=name,
            is_local=name in self.local_branches,
            is_remote=name in self.remote_branches,
            is_current=name == self.current_branch,
            is_protected=name in protected_branches,
        )


class MergeCheckResult(Enum):
    """Outcome of asking git whether a branch is merged."""

    MERGED = "merged"
    NOT_MERGED = "not-merged"
    UNKNOWN = "unknown"


class EligibilityReason(str, Enum):
    """Why a branch may or may not be deleted."""

    PROTECTED = "protected"
    CURRENT = "current"
    OPEN_PR = "open-pr"
    NOT_MERGED = "not-merged"
    LOOKUP_FAILED = "lookup-failed"
    ELIGIBLE = "eligible"


class EligibilityDecision(BaseModel):
    """Classification of a single branch."""

    branch: str
    eligible: bool
    reason: EligibilityReason
    detail: str | None = None


class DeleteStatus(Enum):
    """Outcome of a single local delete attempt."""

    DELETED = "deleted"
    NOT_FULLY_MERGED = "not-fully-merged"
    NOT_WRITABLE = "not-writable"
    OTHER_ERROR = "other-error"


class DeleteResult(BaseModel):
    """Result of a local delete attempt, with git's message on failure."""

    status: DeleteStatus
    detail: str | None = None

    @property
    def deleted(self) -> bool:
        """Check if the branch was deleted."""
        return self.status is DeleteStatus.DELETED


class FailureKind(str, Enum):
    """How the deletion of a branch ended."""

    NONE = "none"
    PROTECTED = "protected"
    NOT_WRITABLE = "not-writable"
    NOT_FULLY_MERGED = "not-fully-merged"
    RECOVERED = "not-fully-merged-then-recovered"
    RECOVERY_FAILED = "not-fully-merged-then-failed"
    REMOTE_FAILURE = "remote-failure"
    UNKNOWN = "unknown"


class DeletionOutcome(BaseModel):
    """Result of processing one branch in a deletion batch."""

    branch: str
    local_deleted: bool = False
    remote_deleted: bool = False
    failure_kind: FailureKind = FailureKind.NONE
    error_message: str | None = None

    @property
    def failed(self) -> bool:
        """Check if the local copy could not be deleted.

        Returns:
            True if the branch was not deleted and was not a protected skip
        """
        return not self.local_deleted and self.failure_kind is not FailureKind.PROTECTED


class CleanupCandidates(BaseModel):
    """Eligible branches grouped by remote presence."""

    local_only: list[str] = Field(default_factory=list)
    with_remote: list[str] = Field(default_factory=list)
    current_branch: str | None = None
    current_branch_skipped: bool = False
    decisions: list[EligibilityDecision] = Field(default_factory=list)

    @property
    def total(self) -> int:
        """Number of branches eligible for deletion."""
        return len(self.local_only) + len(self.with_remote)


class CleanupSummary(BaseModel):
    """Summary of a cleanup run."""

    candidates: CleanupCandidates = Field(default_factory=CleanupCandidates)
    outcomes: list[DeletionOutcome] = Field(default_factory=list)
    cancelled: bool = False

    @property
    def deleted_count(self) -> int:
        """Number of branches whose local copy was deleted."""
        return sum(1 for outcome in self.outcomes if outcome.local_deleted)

    @property
    def failed_count(self) -> int:
        """Number of branches that could not be deleted."""
        return sum(1 for outcome in self.outcomes if outcome.failed)

    @property
    def has_failures(self) -> bool:
        """Check if any branch deletion failed."""
        return self.failed_count > 0


class BranchStatus(str, Enum):
    """Status shown for a branch in the branch report."""

    MERGED = "merged"
    STALE = "stale"
    ACTIVE_PR = "active-pr"
    ACTIVE = "active"
    UNKNOWN = "unknown"


class BranchReport(BaseModel):
    """One row of the branch report."""

    name: str
    status: BranchStatus
    is_current: bool = False
    on_remote: bool = False
    pull_request_number: int | None = None

    @property
    def has_pull_request(self) -> bool:
        """Check if a same-repository pull request was found."""
        return self.pull_request_number is not None
