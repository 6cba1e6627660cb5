"""GitHub milestones report: fetch, filter, order and render repository milestones."""

from ghmilestones.config import RefreshConfig, RepositoryReference, load_refresh_config
from ghmilestones.milestones import refresh
from ghmilestones.models import Milestone, RefreshResult

__all__ = [
    "Milestone",
    "RefreshConfig",
    "RefreshResult",
    "RepositoryReference",
    "load_refresh_config",
    "refresh",
]
