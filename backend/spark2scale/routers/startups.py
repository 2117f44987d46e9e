import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from spark2scale.database import get_db
from spark2scale.dependencies import get_startup_or_404, require_uuid
from spark2scale.models.startup import Startup
from spark2scale.models.workflow import StartupWorkflow
from spark2scale.schemas.startup import (
    IdeaUpdate,
    StartupCreate,
    StartupDashboardResponse,
    StartupResponse,
)
from spark2scale.services.workflow_service import progress
from spark2scale.utils.filesystem import ensure_startup_dirs
from spark2scale.utils.timestamps import utc_now

router = APIRouter(prefix="/startups", tags=["startups"])


def _startup_to_response(startup: Startup) -> StartupResponse:
    return StartupResponse(
        sid=startup.sid,
        startupname=startup.startupname,
        field=startup.field,
        idea_description=startup.idea_description,
        region=startup.region,
        startup_stage=startup.startup_stage,
        founder_id=startup.founder_id,
        created_at=startup.created_at,
    )


@router.post("", response_model=StartupResponse, status_code=201)
async def create_startup(req: StartupCreate, db: Session = Depends(get_db)):
    if not req.startupname.strip():
        raise HTTPException(status_code=400, detail="Startup Name is required.")

    startup = Startup(
        sid=str(uuid.uuid4()),
        startupname=req.startupname.strip(),
        field=req.field,
        idea_description=req.idea_description,
        region=req.region,
        startup_stage=req.startup_stage,
        founder_id=req.founder_id,
        created_at=utc_now(),
    )
    db.add(startup)
    db.commit()
    db.refresh(startup)

    ensure_startup_dirs(startup.sid)
    return _startup_to_response(startup)


@router.get("", response_model=list[StartupResponse])
async def list_startups(db: Session = Depends(get_db)):
    startups = db.query(Startup).order_by(Startup.created_at.desc()).all()
    return [_startup_to_response(s) for s in startups]


@router.get("/dashboard", response_model=list[StartupDashboardResponse])
async def dashboard(founderId: str | None = None, db: Session = Depends(get_db)):
    """Startups with workflow progress, for the founder dashboard cards."""
    query = db.query(Startup)
    if founderId:
        query = query.filter(Startup.founder_id == founderId)
    startups = query.order_by(Startup.created_at.desc()).all()
    if not startups:
        return []

    ids = [s.sid for s in startups]
    workflows = {
        wf.startup_id: wf
        for wf in db.query(StartupWorkflow).filter(StartupWorkflow.startup_id.in_(ids)).all()
    }

    results = []
    for startup in startups:
        count, has_gap = progress(workflows.get(startup.sid))
        results.append(StartupDashboardResponse(
            **_startup_to_response(startup).model_dump(),
            progress_count=count,
            progress_has_gap=has_gap,
        ))
    return results


@router.get("/{sid}", response_model=StartupResponse)
async def get_startup(sid: str, db: Session = Depends(get_db)):
    startup = get_startup_or_404(db, require_uuid(sid, "Startup ID"))
    return _startup_to_response(startup)


@router.put("/{sid}/idea", response_model=StartupResponse)
async def update_idea(sid: str, req: IdeaUpdate, db: Session = Depends(get_db)):
    startup = get_startup_or_404(db, require_uuid(sid, "Startup ID"))
    if not req.idea_description.strip():
        raise HTTPException(status_code=400, detail="Idea description cannot be empty")
    startup.idea_description = req.idea_description
    db.commit()
    db.refresh(startup)
    return _startup_to_response(startup)


@router.delete("/{sid}")
async def delete_startup(sid: str, db: Session = Depends(get_db)):
    startup = get_startup_or_404(db, require_uuid(sid, "Startup ID"))
    db.delete(startup)
    db.commit()
    return {"message": "Startup deleted"}
