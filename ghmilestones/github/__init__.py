"""GitHub integration for fetching milestone data."""

from ghmilestones.github.client import GitHubClient
from ghmilestones.github.models import GitHubMilestone

__all__ = ["GitHubClient", "GitHubMilestone"]
