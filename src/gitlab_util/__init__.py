"""Command-line utilities for GitLab."""

__version__ = "0.1.0"
