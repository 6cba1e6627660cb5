"""Fetch, filter and order GitHub milestones for the milestones report."""

import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from pydantic import ValidationError

from ghmilestones.config import RefreshConfig, RepositoryReference
from ghmilestones.core.interfaces import MilestoneLister
from ghmilestones.errors import MalformedResponseError
from ghmilestones.github.models import GitHubMilestone
from ghmilestones.models import Milestone, RefreshResult
from ghmilestones.util import format_display_date, parse_display_date

logger = logging.getLogger(__name__)

# Queried one after the other for every repository, in this order.
MILESTONE_STATES = ("open", "closed")

NO_DUE_DATE = "No due date."


def resolve_repositories(lists: Iterable[RepositoryReference]) -> List[RepositoryReference]:
    """Keep included repositories, each one once, in first-seen order.

    Args:
        lists: Repository references from the config.

    Returns:
        Unique included references.
    """
    resolved = []
    seen = set()
    for ref in lists:
        if not ref.included:
            continue
        if ref.full_name in seen:
            continue
        seen.add(ref.full_name)
        resolved.append(ref)
    return resolved


def is_stale(milestone: GitHubMilestone, since: Optional[datetime]) -> bool:
    """True if a closed milestone was closed strictly before ``since``."""
    if since is None or milestone.closed_at is None:
        return False
    closed_at = milestone.closed_at
    if closed_at.tzinfo is None:
        closed_at = closed_at.replace(tzinfo=timezone.utc)
    return closed_at < since


def completion_message(open_issues: int, closed_issues: int) -> str:
    """Percentage of closed issues, e.g. '25%'. No issues at all reads '0%'."""
    total = open_issues + closed_issues
    if total == 0:
        return "0%"
    return f"{closed_issues * 100 / total:.0f}%"


def build_milestone(repo: str, raw: GitHubMilestone) -> Milestone:
    """Derive the display fields for one fetched milestone.

    Args:
        repo: Owning repository, 'owner/name'.
        raw: Milestone as returned by GitHub.

    Returns:
        Display-ready Milestone.
    """
    due_date = NO_DUE_DATE
    if raw.due_on is not None:
        due_date = f"Due on {format_display_date(raw.due_on)}."
    updated_at = ""
    if raw.updated_at is not None:
        updated_at = format_display_date(raw.updated_at)

    return Milestone(
        repo=repo,
        name=raw.title,
        url=raw.html_url,
        is_open=raw.state == "open",
        open_issues=raw.open_issues,
        closed_issues=raw.closed_issues,
        complete_msg=completion_message(raw.open_issues, raw.closed_issues),
        due_date=due_date,
        updated_at=updated_at,
    )


def _parse_page(repo: str, state: str, page: Any) -> List[GitHubMilestone]:
    try:
        return [GitHubMilestone.model_validate(item) for item in page]
    except (TypeError, ValidationError) as e:
        raise MalformedResponseError(
            f"Malformed {state} milestone data for {repo}: {e}",
            endpoint=f"/repos/{repo}/milestones",
        ) from e


def fetch_milestones(config: RefreshConfig, client: MilestoneLister) -> List[Milestone]:
    """Fetch milestones for every resolved repository, one call at a time.

    Issues ``2 * N`` calls for ``N`` repositories, open then closed per
    repository. Any failure propagates and nothing collected so far is kept.

    Args:
        config: Refresh config.
        client: GitHub client.

    Returns:
        Filtered milestones with display fields, in fetch order.
    """
    collected: List[Milestone] = []
    for ref in resolve_repositories(config.lists):
        for state in MILESTONE_STATES:
            logger.debug("Listing %s milestones for %s", state, ref.full_name)
            page = client.list_milestones(
                ref.owner,
                ref.repo,
                state=state,
                sort="updated",
                direction="desc",
                per_page=config.page_size,
            )
            for raw in _parse_page(ref.full_name, state, page):
                if state == "closed" and is_stale(raw, config.since):
                    continue
                collected.append(build_milestone(ref.full_name, raw))
    return collected


def _updated_on(milestone: Milestone) -> date:
    if not milestone.updated_at:
        return date.min
    try:
        return parse_display_date(milestone.updated_at)
    except ValueError:
        logger.warning(
            "Cannot parse last-updated date %r of %s - %s, sorting it first",
            milestone.updated_at,
            milestone.repo,
            milestone.name,
        )
        return date.min


def sort_milestones(milestones: Sequence[Milestone]) -> List[Milestone]:
    """Order for presentation: open before closed, then oldest update first.

    Stable, so rows updated on the same day keep their fetch order.
    """
    return sorted(milestones, key=lambda m: (not m.is_open, _updated_on(m)))


def count_milestones(milestones: Iterable[Milestone]) -> Tuple[int, int]:
    """Return (open_count, closed_count)."""
    open_count = 0
    closed_count = 0
    for milestone in milestones:
        if milestone.is_open:
            open_count += 1
        else:
            closed_count += 1
    return open_count, closed_count


def refresh(config: RefreshConfig, client: MilestoneLister) -> RefreshResult:
    """Run one complete refresh of the milestones report.

    Args:
        config: Refresh config.
        client: Pre-authenticated GitHub client.

    Returns:
        A new RefreshResult.

    Raises:
        GitHubAPIError: If any GitHub call fails. No partial result is returned.
    """
    try:
        milestones = fetch_milestones(config, client)
    except Exception as e:
        logger.error("unable to get github milestones: %s", e)
        raise

    result = RefreshResult.from_milestones(sort_milestones(milestones))
    logger.info(
        "Refreshed milestones: %d open, %d closed",
        result.open_count,
        result.closed_count,
    )
    return result


def render_context(result: RefreshResult, config: RefreshConfig) -> Dict[str, Any]:
    """Template context for the milestones widget."""
    return {
        "milestones": result.milestones,
        "open_count": result.open_count,
        "closed_count": result.closed_count,
    }
