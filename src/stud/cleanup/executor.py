"""Deletion of branches selected for cleanup."""

import logging

from rich.console import Console

from stud.cleanup.interaction import UserInteraction
from stud.cleanup.models import DeleteResult, DeleteStatus, DeletionOutcome, FailureKind
from stud.vcs.base import VCSManager
from stud.vcs.exceptions import BranchNotFullyMergedError, BranchNotWritableError

logger = logging.getLogger(__name__)


class DeletionExecutor:
    """Deletes branches one by one, never letting one failure stop the batch.

    A safe delete refused as "not fully merged" can mean the branch is
    genuinely unmerged, or that its remote-tracking ref is stale and the
    branch was already deleted upstream. The remote is asked directly and
    only in the stale case is the branch force-deleted.
    """

    def __init__(
        self,
        vcs: VCSManager,
        interaction: UserInteraction,
        protected_branches: set[str],
        remote_name: str = "origin",
        console: Console | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            vcs: VCS manager for the repository
            interaction: Source of confirmations
            protected_branches: Names that must never be deleted
            remote_name: Remote holding the shared branches
            console: Console for progress output
        """
        self.vcs = vcs
        self.interaction = interaction
        self.protected_branches = protected_branches
        self.remote_name = remote_name
        self.console = console or Console()

    def delete_branches(self, local_only: list[str], with_remote: list[str], quiet: bool = False) -> int:
        """Confirm and delete both batches.

        Args:
            local_only: Branches without a remote counterpart
            with_remote: Branches that also exist on the remote
            quiet: Skip every prompt and keep remote copies

        Returns:
            Number of branches whose local copy was deleted
        """
        outcomes = self.execute(local_only, with_remote, quiet)
        if outcomes is None:
            return 0
        return sum(1 for outcome in outcomes if outcome.local_deleted)

    def execute(
        self, local_only: list[str], with_remote: list[str], quiet: bool = False
    ) -> list[DeletionOutcome] | None:
        """Confirm once, then delete both batches.

        Args:
            local_only: Branches without a remote counterpart
            with_remote: Branches that also exist on the remote
            quiet: Skip every prompt and keep remote copies

        Returns:
            One outcome per branch, or None if the user declined
        """
        total = len(local_only) + len(with_remote)
        if total == 0:
            return []
        if not quiet and not self.confirm_batch(total):
            logger.debug(f"Deletion of {total} branch(es) declined")
            return None

        return self.process(local_only, with_remote, quiet)

    def confirm_batch(self, total: int) -> bool:
        """Ask once before deleting anything.

        Args:
            total: Number of branches about to be deleted

        Returns:
            True if the user confirmed
        """
        return self.interaction.confirm(f"Delete {total} branch(es)?", default=True)

    def process(self, local_only: list[str], with_remote: list[str], quiet: bool = False) -> list[DeletionOutcome]:
        """Delete already confirmed branches.

        Args:
            local_only: Branches without a remote counterpart
            with_remote: Branches that also exist on the remote
            quiet: Never offer to delete remote copies

        Returns:
            One outcome per branch, in processing order
        """
        outcomes = [self.delete_branch(branch, on_remote=False, quiet=quiet) for branch in local_only]
        outcomes.extend(self.delete_branch(branch, on_remote=True, quiet=quiet) for branch in with_remote)
        return outcomes

    def delete_branch(self, branch: str, on_remote: bool, quiet: bool = False) -> DeletionOutcome:
        """Delete one branch locally, then optionally its remote copy.

        Args:
            branch: Branch name
            on_remote: Whether the branch also exists on the remote
            quiet: Never offer to delete the remote copy

        Returns:
            Outcome of the deletion
        """
        if branch in self.protected_branches:
            self.console.print(f"[yellow]Skipping protected branch {branch}[/yellow]")
            return DeletionOutcome(branch=branch, failure_kind=FailureKind.PROTECTED)

        self.console.print(f"Deleting {branch}...")
        result = self.delete_local(branch)

        if result.status is DeleteStatus.DELETED:
            outcome = DeletionOutcome(branch=branch, local_deleted=True)
        elif result.status is DeleteStatus.NOT_FULLY_MERGED:
            outcome = self._recover_not_fully_merged(branch, result)
        elif result.status is DeleteStatus.NOT_WRITABLE:
            outcome = DeletionOutcome(
                branch=branch,
                failure_kind=FailureKind.NOT_WRITABLE,
                error_message=result.detail,
            )
        else:
            outcome = DeletionOutcome(branch=branch, failure_kind=FailureKind.UNKNOWN, error_message=result.detail)

        if not outcome.local_deleted:
            self.console.print(f"[yellow]Warning: Could not delete {branch}: {outcome.error_message}[/yellow]")
            return outcome

        logger.debug(f"Deleted local branch {branch} ({outcome.failure_kind.value})")

        # A recovered stale ref means the remote branch is already gone
        if on_remote and outcome.failure_kind is FailureKind.NONE:
            self._offer_remote_deletion(outcome, quiet)

        return outcome

    def delete_local(self, branch: str, force: bool = False) -> DeleteResult:
        """Attempt a local delete and classify the result.

        Args:
            branch: Branch name
            force: Force the delete

        Returns:
            DeleteResult describing what happened
        """
        try:
            self.vcs.delete_local_branch(branch, force=force)
        except BranchNotFullyMergedError as e:
            return DeleteResult(status=DeleteStatus.NOT_FULLY_MERGED, detail=str(e))
        except BranchNotWritableError as e:
            return DeleteResult(status=DeleteStatus.NOT_WRITABLE, detail=str(e))
        except Exception as e:
            return DeleteResult(status=DeleteStatus.OTHER_ERROR, detail=str(e))
        return DeleteResult(status=DeleteStatus.DELETED)

    def _recover_not_fully_merged(self, branch: str, first: DeleteResult) -> DeletionOutcome:
        """Handle a safe delete refused as "not fully merged".

        Args:
            branch: Branch name
            first: Result of the safe delete

        Returns:
            RECOVERED if the ref was stale and the force delete worked,
            NOT_FULLY_MERGED if the remote branch still exists,
            RECOVERY_FAILED if the force delete failed too,
            UNKNOWN if the remote could not be queried
        """
        try:
            exists = self.vcs.remote_branch_exists(self.remote_name, branch)
        except Exception as e:
            return DeletionOutcome(
                branch=branch,
                failure_kind=FailureKind.UNKNOWN,
                error_message=f"{first.detail}; could not check {self.remote_name}/{branch}: {e}",
            )

        if exists:
            return DeletionOutcome(branch=branch, failure_kind=FailureKind.NOT_FULLY_MERGED, error_message=first.detail)

        logger.info(f"{branch} no longer exists on {self.remote_name}, forcing deletion of stale branch")
        forced = self.delete_local(branch, force=True)
        if forced.deleted:
            return DeletionOutcome(branch=branch, local_deleted=True, failure_kind=FailureKind.RECOVERED)

        return DeletionOutcome(
            branch=branch,
            failure_kind=FailureKind.RECOVERY_FAILED,
            error_message=f"{first.detail}; force delete failed: {forced.detail}",
        )

    def _offer_remote_deletion(self, outcome: DeletionOutcome, quiet: bool) -> None:
        """Delete the remote copy of a branch if the user agrees.

        Failures only produce a warning; the local deletion still counts.

        Args:
            outcome: Outcome of the local deletion, updated in place
            quiet: Keep the remote copy without asking
        """
        branch = outcome.branch
        if quiet:
            logger.debug(f"Keeping {self.remote_name}/{branch} (quiet mode)")
            return

        if not self.interaction.confirm(f"Also delete {self.remote_name}/{branch}?", default=False):
            logger.debug(f"Keeping {self.remote_name}/{branch}")
            return

        try:
            self.vcs.delete_remote_branch(self.remote_name, branch)
        except Exception as e:
            self.console.print(f"[yellow]Warning: Could not delete {self.remote_name}/{branch}: {e}[/yellow]")
            outcome.failure_kind = FailureKind.REMOTE_FAILURE
            outcome.error_message = str(e)
            return

        outcome.remote_deleted = True
        self.console.print(f"[green]Deleted {self.remote_name}/{branch}[/green]")
