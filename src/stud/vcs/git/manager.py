"""Git operations manager."""

import logging
from pathlib import Path

import git

from stud.vcs.base import VCSManager
from stud.vcs.exceptions import (
    BranchNotFullyMergedError,
    BranchNotWritableError,
    NotARepositoryError,
    VCSOperationError,
)

logger = logging.getLogger(__name__)

# Fragments of git's stderr (GitPython runs git with LC_ALL=C)
NOT_FULLY_MERGED_MARKER = "not fully merged"
NOT_WRITABLE_MARKERS = ("cannot lock ref", "permission denied", "unable to create")


class GitManager(VCSManager):
    """Manages Git operations for stud."""

    def __init__(self, repo_path: str | Path | None = None) -> None:
        """Initialize Git manager.

        Args:
            repo_path: Path to Git repository (default: current directory)

        Raises:
            NotARepositoryError: If path is not a Git repository
        """
        self.repo_path = Path(repo_path or Path.cwd())

        try:
            self.repo = git.Repo(self.repo_path, search_parent_directories=True)
        except (git.InvalidGitRepositoryError, git.NoSuchPathError) as e:
            msg = f"Not a Git repository: {self.repo_path}"
            raise NotARepositoryError(msg) from e
        except git.GitError as e:
            msg = f"Git error: {e}"
            raise VCSOperationError(msg) from e

    def is_repository(self) -> bool:
        """Check if current directory is a Git repository.

        Returns:
            True if in a Git repository
        """
        try:
            return self.repo.git_dir is not None
        except Exception:
            return False

    def get_current_branch(self) -> str:
        """Get the name of the current branch.

        Returns:
            Current branch name, or "HEAD" when the checkout is detached

        Raises:
            VCSOperationError: If unable to determine branch
        """
        try:
            return self.repo.git.rev_parse("--abbrev-ref", "HEAD").strip()
        except git.GitCommandError as e:
            msg = f"Unable to get current branch: {e}"
            raise VCSOperationError(msg) from e

    def get_local_branches(self) -> list[str]:
        """List local branch names.

        Returns:
            Local branch names

        Raises:
            VCSOperationError: If branches cannot be listed
        """
        return self._list_refs("refs/heads/")

    def get_remote_branches(self, remote_name: str = "origin") -> list[str]:
        """List remote-tracking branch names for a remote.

        The symbolic ``<remote>/HEAD`` ref is excluded. A remote that is not
        configured has no branches.

        Args:
            remote_name: Name of the remote

        Returns:
            Branch names without the remote prefix

        Raises:
            VCSOperationError: If branches cannot be listed
        """
        if remote_name not in [remote.name for remote in self.repo.remotes]:
            logger.debug(f"Remote {remote_name!r} is not configured")
            return []

        branches = self._list_refs(f"refs/remotes/{remote_name}/")
        return [branch for branch in branches if branch != "HEAD"]

    def _list_refs(self, prefix: str) -> list[str]:
        """List ref names under a namespace with the namespace stripped.

        Args:
            prefix: Ref namespace ending with a slash (e.g. "refs/heads/")

        Returns:
            Ref names relative to the prefix

        Raises:
            VCSOperationError: If git for-each-ref fails
        """
        try:
            output = self.repo.git.for_each_ref("--format=%(refname)", prefix)
        except git.GitCommandError as e:
            msg = f"Unable to list {prefix} refs: {e}"
            raise VCSOperationError(msg) from e

        return [line[len(prefix) :] for line in output.splitlines() if line.startswith(prefix)]

    def is_merged_into(self, branch: str, base_ref: str) -> bool:
        """Check whether a branch is fully merged into a base reference.

        Args:
            branch: Local branch name
            base_ref: Reference to compare against (e.g. "origin/develop")

        Returns:
            True if the branch tip is an ancestor of base_ref

        Raises:
            VCSOperationError: If either ref is unknown or git fails
        """
        try:
            self.repo.git.merge_base("--is-ancestor", f"refs/heads/{branch}", base_ref)
        except git.GitCommandError as e:
            # --is-ancestor exits 1 for "no" and 128 for errors
            if e.status == 1:
                return False
            msg = f"Unable to check if {branch} is merged into {base_ref}: {e}"
            raise VCSOperationError(msg) from e
        return True

    def delete_local_branch(self, branch: str, force: bool = False) -> None:
        """Delete a local branch with ``git branch -d`` (or ``-D`` when forced).

        Args:
            branch: Branch to delete
            force: Delete even if git considers the branch unmerged

        Raises:
            BranchNotFullyMergedError: If git refuses a safe delete as unmerged
            BranchNotWritableError: If the ref is locked or not writable
            VCSOperationError: On any other failure
        """
        try:
            self.repo.git.branch("-D" if force else "-d", branch)
        except git.GitCommandError as e:
            details = str(e)
            lowered = details.lower()
            if NOT_FULLY_MERGED_MARKER in lowered:
                raise BranchNotFullyMergedError(f"Branch {branch} is not fully merged: {details}") from e
            if any(marker in lowered for marker in NOT_WRITABLE_MARKERS):
                raise BranchNotWritableError(f"Branch {branch} cannot be modified: {details}") from e
            raise VCSOperationError(f"Failed to delete branch {branch}: {details}") from e

    def delete_remote_branch(self, remote_name: str, branch: str) -> None:
        """Delete a branch on a remote with ``git push <remote> --delete``.

        Raises:
            VCSOperationError: If the push fails
        """
        try:
            self.repo.git.push(remote_name, "--delete", branch)
        except git.GitCommandError as e:
            msg = f"Failed to delete {remote_name}/{branch}: {e}"
            raise VCSOperationError(msg) from e

    def remote_branch_exists(self, remote_name: str, branch: str) -> bool:
        """Ask the remote whether a branch exists, bypassing remote-tracking refs.

        Args:
            remote_name: Name of the remote
            branch: Branch name

        Returns:
            True if the remote advertises refs/heads/<branch>

        Raises:
            VCSOperationError: If the remote cannot be queried
        """
        ref = f"refs/heads/{branch}"
        try:
            output = self.repo.git.ls_remote("--heads", remote_name, ref)
        except git.GitCommandError as e:
            msg = f"Unable to query {remote_name} for {branch}: {e}"
            raise VCSOperationError(msg) from e

        # ls-remote patterns match ref suffixes, so compare the full name
        for line in output.splitlines():
            parts = line.split("\t", 1)
            if len(parts) == 2 and parts[1].strip() == ref:
                return True
        return False

    def get_remote_url(self, remote_name: str = "origin") -> str | None:
        """Get the configured URL of a remote.

        Args:
            remote_name: Name of the remote

        Returns:
            Remote URL, or None if the remote is not configured
        """
        try:
            url = self.repo.remote(remote_name).url
        except (ValueError, git.GitCommandError):
            return None
        url = url.strip()
        return url or None
