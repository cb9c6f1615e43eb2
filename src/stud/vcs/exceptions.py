"""VCS exceptions for stud.

Git failures are translated into these classes by the VCS adapter so that
callers can branch on the kind of failure instead of on git's output.
"""


class VCSError(Exception):
    """Base exception for all VCS-related errors."""


class NotARepositoryError(VCSError):
    """Raised when a directory is not a valid repository."""


class VCSOperationError(VCSError):
    """Raised when a VCS operation fails."""


class BranchNotFullyMergedError(VCSOperationError):
    """Raised when a safe branch delete is refused because the branch is not fully merged."""


class BranchNotWritableError(VCSOperationError):
    """Raised when a branch ref cannot be modified (lock or permission failure)."""
