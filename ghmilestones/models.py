"""Result models produced by a milestones refresh."""

from typing import Iterable, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Milestone(BaseModel):
    """One milestone row, ready for display."""

    model_config = ConfigDict(frozen=True)

    repo: str = Field(..., description="Owning repository, 'owner/name'")
    name: str = Field(..., description="Milestone title")
    url: str = Field(..., description="Canonical web URL")
    is_open: bool = Field(..., description="True for open milestones")
    open_issues: int = Field(0, ge=0)
    closed_issues: int = Field(0, ge=0)
    complete_msg: str = Field(..., description="Completion percentage, e.g. '25%'")
    due_date: str = Field(..., description="Due-date message")
    updated_at: str = Field("", description="Last-updated date as 'Month D YYYY', or empty")


class RefreshResult(BaseModel):
    """Ordered milestones plus open/closed tallies."""

    model_config = ConfigDict(frozen=True)

    milestones: Tuple[Milestone, ...] = ()
    open_count: int = Field(0, ge=0)
    closed_count: int = Field(0, ge=0)

    @model_validator(mode="after")
    def _counts_match(self) -> "RefreshResult":
        if self.open_count + self.closed_count != len(self.milestones):
            raise ValueError(
                f"open_count ({self.open_count}) + closed_count ({self.closed_count}) "
                f"!= number of milestones ({len(self.milestones)})"
            )
        return self

    @classmethod
    def from_milestones(cls, milestones: Iterable[Milestone]) -> "RefreshResult":
        """Wrap an already ordered list, tallying open and closed entries."""
        from ghmilestones.milestones import count_milestones

        milestones = tuple(milestones)
        open_count, closed_count = count_milestones(milestones)
        return cls(milestones=milestones, open_count=open_count, closed_count=closed_count)
