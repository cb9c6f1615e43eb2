"""Eligibility policy deciding which branches may be deleted."""

import logging

from stud.cleanup.models import Branch, EligibilityDecision, EligibilityReason, MergeCheckResult
from stud.cleanup.pull_requests import PullRequestLookup
from stud.vcs.base import VCSManager

logger = logging.getLogger(__name__)


class EligibilityClassifier:
    """Applies the cleanup policy to one branch at a time.

    Rules are evaluated in order and the first match wins: protected,
    current checkout, open pull request, merge status.
    """

    def __init__(self, vcs: VCSManager, base_branch: str) -> None:
        """Initialize the classifier.

        Args:
            vcs: VCS manager used for merge checks
            base_branch: Reference branches must be merged into
        """
        self.vcs = vcs
        self.base_branch = base_branch

    def classify(self, branch: Branch, lookup: PullRequestLookup) -> EligibilityDecision:
        """Decide whether a branch may be deleted.

        Args:
            branch: Branch to classify
            lookup: Pull request lookup for the run

        Returns:
            Decision with the reason of the first matching rule
        """
        name = branch.name

        if branch.is_protected:
            logger.debug(f"{name}: protected branch, skipping")
            return self._skip(name, EligibilityReason.PROTECTED)

        if branch.is_current:
            logger.debug(f"{name}: current branch, skipping")
            return self._skip(name, EligibilityReason.CURRENT)

        if self.has_open_pull_request(name, lookup):
            logger.debug(f"{name}: open pull request, skipping")
            return self._skip(name, EligibilityReason.OPEN_PR)

        merge_status = self.check_merged(name)
        if merge_status is MergeCheckResult.UNKNOWN:
            return self._skip(
                name,
                EligibilityReason.LOOKUP_FAILED,
                f"Could not check merge status against {self.base_branch}",
            )
        if merge_status is MergeCheckResult.NOT_MERGED:
            logger.debug(f"{name}: not merged into {self.base_branch}, skipping")
            return self._skip(name, EligibilityReason.NOT_MERGED)

        logger.debug(f"{name}: eligible for deletion")
        return EligibilityDecision(branch=name, eligible=True, reason=EligibilityReason.ELIGIBLE)

    def has_open_pull_request(self, branch: str, lookup: PullRequestLookup) -> bool:
        """Check for an open same-repository pull request.

        Lookup failures count as "no pull request" so they never block cleanup.

        Args:
            branch: Branch name
            lookup: Pull request lookup for the run

        Returns:
            True if the branch has an open pull request
        """
        try:
            pull_request = lookup.find(branch)
        except Exception as e:
            logger.warning(f"Could not check pull request for {branch}: {e}")
            return False

        if pull_request is None:
            return False

        logger.debug(f"{branch}: pull request #{pull_request.number} found (state: {pull_request.state})")
        return pull_request.is_open

    def check_merged(self, branch: str) -> MergeCheckResult:
        """Ask the VCS whether a branch is merged into the base branch.

        Args:
            branch: Branch name

        Returns:
            MERGED, NOT_MERGED, or UNKNOWN when the check failed
        """
        try:
            merged = self.vcs.is_merged_into(branch, self.base_branch)
        except Exception as e:
            logger.warning(f"Could not check merge status for {branch}: {e}")
            return MergeCheckResult.UNKNOWN
        return MergeCheckResult.MERGED if merged else MergeCheckResult.NOT_MERGED

    @staticmethod
    def _skip(branch: str, reason: EligibilityReason, detail: str | None = None) -> EligibilityDecision:
        return EligibilityDecision(branch=branch, eligible=False, reason=reason, detail=detail)
