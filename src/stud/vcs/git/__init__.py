"""Git implementation of VCS operations."""

from stud.vcs.git.manager import GitManager

__all__ = ["GitManager"]
