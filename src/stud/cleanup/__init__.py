"""Branch cleanup functionality."""

from stud.cleanup.eligibility import EligibilityClassifier
from stud.cleanup.executor import DeletionExecutor
from stud.cleanup.interaction import ConsoleInteraction, UserInteraction
from stud.cleanup.inventory import BranchInventory
from stud.cleanup.models import (
    BranchReport,
    BranchStatus,
    CleanupCandidates,
    CleanupSummary,
    DeletionOutcome,
    EligibilityDecision,
    EligibilityReason,
    FailureKind,
)
from stud.cleanup.orchestrator import BranchCleanOrchestrator
from stud.cleanup.pull_requests import (
    BulkIndexLookup,
    NullLookup,
    PerBranchLookup,
    PullRequestLookup,
    build_pull_request_index,
    select_pull_request_lookup,
)

__all__ = [
    "BranchCleanOrchestrator",
    "BranchInventory",
    "BranchReport",
    "BranchStatus",
    "BulkIndexLookup",
    "CleanupCandidates",
    "CleanupSummary",
    "ConsoleInteraction",
    "DeletionExecutor",
    "DeletionOutcome",
    "EligibilityClassifier",
    "EligibilityDecision",
    "EligibilityReason",
    "FailureKind",
    "NullLookup",
    "PerBranchLookup",
    "PullRequestLookup",
    "UserInteraction",
    "build_pull_request_index",
    "select_pull_request_lookup",
]
