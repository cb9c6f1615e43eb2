"""Version control abstraction for stud."""

from stud.vcs.base import VCSManager
from stud.vcs.exceptions import (
    BranchNotFullyMergedError,
    BranchNotWritableError,
    NotARepositoryError,
    VCSError,
    VCSOperationError,
)

__all__ = [
    "BranchNotFullyMergedError",
    "BranchNotWritableError",
    "NotARepositoryError",
    "VCSError",
    "VCSManager",
    "VCSOperationError",
]
