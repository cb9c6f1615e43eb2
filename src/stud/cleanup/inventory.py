"""Branch inventory: what exists locally, on the remote, and what is checked out."""

import logging

from stud.cleanup.models import InventorySnapshot
from stud.vcs.base import VCSManager

logger = logging.getLogger(__name__)


class BranchInventory:
    """Read-only view of the repository's branches.

    Errors from the VCS are propagated unchanged: cleanup cannot proceed
    without knowing which branches exist.
    """

    def __init__(self, vcs: VCSManager, remote_name: str = "origin") -> None:
        """Initialize the inventory.

        Args:
            vcs: VCS manager for the repository
            remote_name: Remote whose branches are considered shared
        """
        self.vcs = vcs
        self.remote_name = remote_name

    def local_branches(self) -> set[str]:
        """Local branch names."""
        return set(self.vcs.get_local_branches())

    def remote_branches(self) -> set[str]:
        """Branch names tracked for the configured remote."""
        return set(self.vcs.get_remote_branches(self.remote_name))

    def current_branch(self) -> str:
        """Name of the checked out branch."""
        return self.vcs.get_current_branch()

    def collect(self) -> InventorySnapshot:
        """Collect local branches, remote branches and the current branch.

        Returns:
            Snapshot used for the rest of the run

        Raises:
            VCSError: If any of the listings fails
        """
        local = self.local_branches()
        logger.debug(f"Found {len(local)} local branches")

        remote = self.remote_branches()
        logger.debug(f"Found {len(remote)} remote branches on {self.remote_name}")

        current = self.current_branch()
        logger.debug(f"Current branch: {current}")

        return InventorySnapshot(local_branches=local, remote_branches=remote, current_branch=current)
