from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from spark2scale.database import get_db
from spark2scale.dependencies import require_uuid
from spark2scale.models.document import Document
from spark2scale.models.startup import Startup
from spark2scale.models.workflow import STAGE_COLUMNS, StartupWorkflow
from spark2scale.schemas.workflow import WorkflowResponse, WorkflowUpdate
from spark2scale.services.workflow_service import upsert_workflow, workflow_to_response
from spark2scale.utils.timestamps import utc_now

router = APIRouter(prefix="/workflow", tags=["workflow"])


@router.get("/{startupId}", response_model=WorkflowResponse)
async def get_workflow(startupId: str, db: Session = Depends(get_db)):
    """Stored workflow, or an all-false default when the startup has none yet."""
    sid = require_uuid(startupId, "Startup ID")
    return workflow_to_response(sid, db.get(StartupWorkflow, sid))


@router.post("/update", response_model=WorkflowResponse)
async def update_workflow(req: WorkflowUpdate, db: Session = Depends(get_db)):
    """Upsert the full workflow record. Every stage flag is replaced."""
    sid = require_uuid(req.startup_id, "Startup ID")
    if db.get(Startup, sid) is None:
        raise HTTPException(status_code=400, detail=f"Startup with ID {sid} does not exist.")

    flags = {name: getattr(req, name) for name in STAGE_COLUMNS}
    wf = upsert_workflow(db, sid, flags)
    db.commit()
    db.refresh(wf)
    return workflow_to_response(sid, wf)


@router.post("/reset/{startupId}")
async def reset_progress(startupId: str, db: Session = Depends(get_db)):
    """Archive current documents and clear every stage flag."""
    sid = require_uuid(startupId, "Startup ID")
    if db.get(Startup, sid) is None:
        raise HTTPException(status_code=404, detail="Startup not found")

    archived = (
        db.query(Document)
        .filter(Document.startup_id == sid, Document.is_current.is_(True))
        .update({Document.is_current: False}, synchronize_session=False)
    )
    upsert_workflow(db, sid, {})
    db.commit()
    return {"message": "Reset successful. Workflow and documents archived.", "archived_documents": archived}


@router.post("/complete-pitch/{startupId}")
async def complete_pitch_stage(startupId: str, db: Session = Depends(get_db)):
    sid = require_uuid(startupId, "Startup ID")
    wf = db.get(StartupWorkflow, sid)
    if wf is None:
        raise HTTPException(status_code=404, detail="Workflow not found for this startup.")

    wf.pitch_deck = True
    wf.updated_at = utc_now()
    db.commit()
    db.refresh(wf)
    return {
        "message": "Pitch Deck stage marked as complete.",
        "workflow": workflow_to_response(sid, wf).model_dump(by_alias=True),
    }
