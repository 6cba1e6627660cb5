"""Pydantic model for the GitHub milestone REST payload.

Maps the fields we read from GitHub's REST API v3 milestone object; anything
else in the response is ignored.
API Reference: https://docs.github.com/en/rest/issues/milestones
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class GitHubMilestone(BaseModel):
    """GitHub milestone as returned by ``GET /repos/{owner}/{repo}/milestones``."""

    title: str = Field(..., description="Milestone title (string)")
    html_url: str = Field(..., description="Canonical web URL of the milestone")
    state: str = Field(..., description="Current state: 'open', 'closed' (string)")
    open_issues: int = Field(0, ge=0, description="Number of open issues (integer)")
    closed_issues: int = Field(0, ge=0, description="Number of closed issues (integer)")
    due_on: Optional[datetime] = Field(None, description="Due date (ISO 8601)")
    updated_at: Optional[datetime] = Field(
        None, description="Timestamp of last milestone update (ISO 8601)"
    )
    closed_at: Optional[datetime] = Field(
        None, description="Timestamp the milestone was closed (ISO 8601)"
    )
