from pydantic import BaseModel

from app.models.icons import Icon


class DashboardStats(BaseModel):
    clients_total: int = 0
    clients_active: int = 0
    clients_inactive: int = 0
    requests_total: int = 0
    samples_total: int = 0
    samples_pending: int = 0
    samples_awaiting_results: int = 0
    results_total: int = 0


class PendingTask(BaseModel):
    title: str
    description: str
    icon: Icon
    color: str
    count: int = 0


class ActivityItem(BaseModel):
    kind: str  # client | sample
    initials: str
    title: str
    description: str
    icon: Icon
    date: str | None = None
    time_ago: str


class DashboardResponse(BaseModel):
    stats: DashboardStats
    pending_tasks: list[PendingTask]
    recent_activity: list[ActivityItem]
