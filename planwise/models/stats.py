"""Dashboard statistics model for planwise."""

from pydantic import BaseModel, Field


class DashboardStats(BaseModel):
    """Headline numbers for the dashboard widgets."""

    total_active: int = Field(0, description="Tasks not yet completed")
    today_tasks: int = Field(0, description="Active tasks scheduled today")
    today_completed: int = Field(0, description="Tasks completed today")
    overdue: int = Field(0, description="Active tasks scheduled before today")
    time_spent_today: int = Field(0, description="Minutes of tasks completed today")
    streak: int = Field(0, description="Consecutive days, ending today, with a completion")
    completion_rate: float = Field(0.0, description="Percent of tasks created in the last 7 days that are done")
    high_priority: int = Field(0, description="Active High or Critical tasks")
