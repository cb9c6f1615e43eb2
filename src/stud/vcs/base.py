"""Abstract base class for version control operations used by branch cleanup."""

from abc import ABC, abstractmethod
from pathlib import Path


class VCSManager(ABC):
    """Abstract base class for version control system managers.

    Defines the branch operations the cleanup engine needs. Implementations
    translate tool-specific failures into the exceptions from
    ``stud.vcs.exceptions``.
    """

    @abstractmethod
    def __init__(self, repo_path: str | Path | None = None) -> None:
        """Initialize VCS manager.

        Args:
            repo_path: Path to repository (default: current directory)

        Raises:
            NotARepositoryError: If path is not a valid repository
        """

    @abstractmethod
    def is_repository(self) -> bool:
        """Check if current directory is a repository.

        Returns:
            True if in a repository
        """

    @abstractmethod
    def get_current_branch(self) -> str:
        """Get the name of the current branch.

        Returns:
            Current branch name ("HEAD" when detached)

        Raises:
            VCSOperationError: If unable to determine branch
        """

    @abstractmethod
    def get_local_branches(self) -> list[str]:
        """List local branch names.

        Raises:
            VCSOperationError: If branches cannot be listed
        """

    @abstractmethod
    def get_remote_branches(self, remote_name: str = "origin") -> list[str]:
        """List branch names known locally for a remote, without the remote prefix.

        Args:
            remote_name: Name of the remote

        Returns:
            Branch names (e.g. ``feat/x`` for ``origin/feat/x``)

        Raises:
            VCSOperationError: If branches cannot be listed
        """

    @abstractmethod
    def is_merged_into(self, branch: str, base_ref: str) -> bool:
        """Check whether a branch is fully merged into a base reference.

        Args:
            branch: Branch to check
            base_ref: Reference to compare against (e.g. ``origin/develop``)

        Returns:
            True if every commit of ``branch`` is reachable from ``base_ref``

        Raises:
            VCSOperationError: If merge status cannot be determined
        """

    @abstractmethod
    def delete_local_branch(self, branch: str, force: bool = False) -> None:
        """Delete a local branch.

        Args:
            branch: Branch to delete
            force: Delete even if the branch is not fully merged

        Raises:
            BranchNotFullyMergedError: If a safe delete is refused as unmerged
            BranchNotWritableError: If the branch ref cannot be modified
            VCSOperationError: On any other failure
        """

    @abstractmethod
    def delete_remote_branch(self, remote_name: str, branch: str) -> None:
        """Delete a branch on a remote.

        Raises:
            VCSOperationError: If the remote refuses or cannot be reached
        """

    @abstractmethod
    def remote_branch_exists(self, remote_name: str, branch: str) -> bool:
        """Ask the remote itself whether a branch exists.

        Unlike ``get_remote_branches`` this does not trust remote-tracking refs.

        Raises:
            VCSOperationError: If the remote cannot be queried
        """

    @abstractmethod
    def get_remote_url(self, remote_name: str = "origin") -> str | None:
        """Get the configured URL of a remote.

        Returns:
            Remote URL, or None if the remote is not configured
        """
