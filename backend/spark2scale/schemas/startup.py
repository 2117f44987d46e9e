from pydantic import BaseModel


class StartupCreate(BaseModel):
    startupname: str
    field: str | None = None
    idea_description: str | None = None
    region: str | None = None
    startup_stage: str | None = None
    founder_id: str | None = None


class IdeaUpdate(BaseModel):
    idea_description: str


class StartupResponse(BaseModel):
    sid: str
    startupname: str
    field: str | None
    idea_description: str | None
    region: str | None
    startup_stage: str | None
    founder_id: str | None
    created_at: str


class StartupDashboardResponse(StartupResponse):
    progress_count: int = 0
    progress_has_gap: bool = False
