"""GitLab REST API access."""

from .client import GitLabClient
from .models import CreateMergeRequestRequest, MergeRequest, Project

__all__ = [
    "CreateMergeRequestRequest",
    "GitLabClient",
    "MergeRequest",
    "Project",
]
