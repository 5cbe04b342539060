from datetime import datetime

from pydantic import BaseModel


class SaveJobRequest(BaseModel):
    job_id: str


class SavedJobItem(BaseModel):
    id: str
    job_id: str
    job_title: str
    company: str | None = None
    location: str | None = None
    remote: bool = False
    job_status: str
    applied: bool = False
    saved_at: datetime | None = None


class SavedJobStats(BaseModel):
    total: int = 0
    open: int = 0
    applied: int = 0


class SavedJobList(BaseModel):
    stats: SavedJobStats
    jobs: list[SavedJobItem]
