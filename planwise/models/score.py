"""Priority score models for planwise."""

from pydantic import BaseModel, Field, computed_field

from planwise.models.task import Task


class ScoreBreakdown(BaseModel):
    """Per-factor contributions to a task's priority score."""

    priority: int = Field(..., description="Priority weight")
    due: int = Field(0, description="Due-date urgency")
    time_match: int = Field(0, description="Time-of-day match bonus")
    energy: int = Field(0, description="Energy alignment bonus")

    @computed_field
    @property
    def total(self) -> int:
        return self.priority + self.due + self.time_match + self.energy


class ScoredTask(BaseModel):
    """A task together with its score, as shown in smart suggestions."""

    task: Task
    score: int
    breakdown: ScoreBreakdown
