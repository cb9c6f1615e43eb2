"""stud: developer workflow CLI bridging git, GitHub and the issue tracker."""

__version__ = "0.1.0"
