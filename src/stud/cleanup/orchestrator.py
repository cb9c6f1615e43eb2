"""Branch cleanup orchestration."""

import logging

from rich.console import Console

from stud.cleanup.eligibility import EligibilityClassifier
from stud.cleanup.executor import DeletionExecutor
from stud.cleanup.interaction import UserInteraction
from stud.cleanup.inventory import BranchInventory
from stud.cleanup.models import (
    BranchReport,
    BranchStatus,
    CleanupCandidates,
    CleanupSummary,
    EligibilityReason,
    MergeCheckResult,
)
from stud.cleanup.pull_requests import PullRequestLookup, select_pull_request_lookup
from stud.github.base import PullRequestProvider
from stud.github.models import PullRequest
from stud.vcs.base import VCSManager

logger = logging.getLogger(__name__)


class BranchCleanOrchestrator:
    """Orchestrates branch cleanup.

    Coordinates:
    - Branch inventory (local, remote, current)
    - Pull request lookup (bulk index with per-branch fallback)
    - Eligibility classification
    - Confirmed deletion with stale-ref recovery
    """

    def __init__(
        self,
        vcs: VCSManager,
        provider: PullRequestProvider | None,
        interaction: UserInteraction,
        base_branch: str = "origin/develop",
        remote_name: str = "origin",
        protected_branches: list[str] | None = None,
        console: Console | None = None,
    ) -> None:
        """Initialize the cleanup orchestrator.

        Args:
            vcs: VCS manager for the repository
            provider: Pull request source, or None to skip pull request checks
            interaction: Source of confirmations
            base_branch: Reference branches must be merged into
            remote_name: Remote holding the shared branches
            protected_branches: Names that must never be deleted
            console: Console for user-facing output
        """
        self.provider = provider
        self.base_branch = base_branch
        self.remote_name = remote_name
        self.protected_branches = set(protected_branches or [])
        self.console = console or Console()
        self.inventory = BranchInventory(vcs, remote_name)
        self.classifier = EligibilityClassifier(vcs, base_branch)
        self.executor = DeletionExecutor(
            vcs,
            interaction,
            self.protected_branches,
            remote_name=remote_name,
            console=self.console,
        )

    def find_branches_to_clean(self) -> CleanupCandidates:
        """Classify every local branch and group the eligible ones.

        Returns:
            Eligible branches split by remote presence, with all decisions

        Raises:
            VCSError: If the branch inventory cannot be collected
        """
        snapshot = self.inventory.collect()
        lookup = select_pull_request_lookup(self.provider)

        candidates = CleanupCandidates(current_branch=snapshot.current_branch)
        for name in sorted(snapshot.local_branches):
            branch = snapshot.branch(name, self.protected_branches)
            decision = self.classifier.classify(branch, lookup)
            candidates.decisions.append(decision)

            if decision.reason is EligibilityReason.CURRENT:
                candidates.current_branch_skipped = True
            if not decision.eligible:
                continue

            if branch.is_remote:
                candidates.with_remote.append(name)
            else:
                candidates.local_only.append(name)

        logger.debug(f"Summary: {len(candidates.local_only)} local-only, {len(candidates.with_remote)} with remote")
        return candidates

    def clean(self, quiet: bool = False) -> CleanupSummary:
        """Find merged branches and delete them.

        Args:
            quiet: Skip confirmations and keep remote copies

        Returns:
            Summary of the run; cancelled if the user declined

        Raises:
            VCSError: If the branch inventory cannot be collected
        """
        candidates = self.find_branches_to_clean()
        summary = CleanupSummary(candidates=candidates)

        if candidates.total == 0:
            self.console.print("No branches to clean.")
            return summary

        if candidates.current_branch_skipped:
            self.console.print(
                f"[yellow]Note: current branch {candidates.current_branch} was skipped. "
                "Switch to another branch to clean it.[/yellow]"
            )

        self._display_candidates(candidates, quiet)

        outcomes = self.executor.execute(candidates.local_only, candidates.with_remote, quiet)
        if outcomes is None:
            self.console.print("Cleanup cancelled.")
            summary.cancelled = True
            return summary

        summary.outcomes = outcomes
        return summary

    def _display_candidates(self, candidates: CleanupCandidates, quiet: bool) -> None:
        """Print the branches about to be deleted.

        Args:
            candidates: Eligible branches
            quiet: Whether remote copies will be kept without asking
        """
        self.console.print(f"Found {candidates.total} branch(es) to clean.")

        if candidates.local_only:
            self.console.print(f"\n[bold]Local only ({len(candidates.local_only)}):[/bold]")
            for branch in candidates.local_only:
                self.console.print(f"  - {branch}")

        if candidates.with_remote:
            self.console.print(f"\n[bold]Also on {self.remote_name} ({len(candidates.with_remote)}):[/bold]")
            for branch in candidates.with_remote:
                self.console.print(f"  - {branch}")
            if not quiet:
                self.console.print(f"[dim]You will be asked whether to delete each {self.remote_name} copy.[/dim]")

    def report_branches(self) -> list[BranchReport]:
        """Describe every local branch without deleting anything.

        Returns:
            One report per local branch, sorted by name

        Raises:
            VCSError: If the branch inventory cannot be collected
        """
        snapshot = self.inventory.collect()
        lookup = select_pull_request_lookup(self.provider)

        reports = []
        for name in sorted(snapshot.local_branches):
            on_remote = name in snapshot.remote_branches
            pull_request = self._find_pull_request(name, lookup)
            reports.append(
                BranchReport(
                    name=name,
                    status=self._branch_status(name, on_remote, pull_request),
                    is_current=name == snapshot.current_branch,
                    on_remote=on_remote,
                    pull_request_number=pull_request.number if pull_request else None,
                )
            )
        return reports

    def _branch_status(self, name: str, on_remote: bool, pull_request: PullRequest | None) -> BranchStatus:
        if pull_request is not None and pull_request.is_open:
            return BranchStatus.ACTIVE_PR

        merge_status = self.classifier.check_merged(name)
        if merge_status is MergeCheckResult.UNKNOWN:
            return BranchStatus.UNKNOWN
        if merge_status is MergeCheckResult.MERGED:
            return BranchStatus.MERGED if on_remote else BranchStatus.STALE
        return BranchStatus.ACTIVE

    @staticmethod
    def _find_pull_request(name: str, lookup: PullRequestLookup) -> PullRequest | None:
        try:
            return lookup.find(name)
        except Exception as e:
            logger.debug(f"Error checking pull request for {name}: {e}")
            return None
