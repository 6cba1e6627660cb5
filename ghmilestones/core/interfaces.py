"""
Protocol-based interfaces for the milestones pipeline.

These protocols define the contracts a caller's collaborators must satisfy:
the GitHub client handed to a refresh, and the hooks a report registers.
"""

from typing import TYPE_CHECKING, Any, Dict, List, Protocol

if TYPE_CHECKING:
    from ghmilestones.config import RefreshConfig
    from ghmilestones.models import RefreshResult


class MilestoneLister(Protocol):
    """
    Protocol for the pre-authenticated GitHub client used by a refresh.

    ``GitHubClient`` implements it; tests pass in-memory fakes.
    """

    def list_milestones(
        self,
        owner: str,
        repo: str,
        state: str = "open",
        sort: str = "updated",
        direction: str = "desc",
        per_page: int = 30,
    ) -> List[Dict[str, Any]]:
        """
        Return one page of raw milestone dicts.

        Args:
            owner: Repository owner
            repo: Repository name
            state: "open" or "closed"
            sort: Sort field, "updated" for the pipeline
            direction: "asc" or "desc"
            per_page: Page size bound
        """
        ...


class RefreshHook(Protocol):
    """Build a fresh result for one config."""

    def __call__(self, config: "RefreshConfig", client: MilestoneLister) -> "RefreshResult":
        ...


class RenderHook(Protocol):
    """Turn a stored result into the template context."""

    def __call__(self, result: "RefreshResult", config: "RefreshConfig") -> Dict[str, Any]:
        ...
