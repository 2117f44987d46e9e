from sqlalchemy.orm import Session

from spark2scale.models.workflow import STAGE_COLUMNS, StartupWorkflow
from spark2scale.schemas.workflow import WorkflowResponse
from spark2scale.utils.timestamps import utc_now


def workflow_to_response(startup_id: str, wf: StartupWorkflow | None) -> WorkflowResponse:
    """Serialize a stored workflow, or the all-false default when none exists yet."""
    if wf is None:
        return WorkflowResponse(startup_id=startup_id, updated_at=utc_now())
    return WorkflowResponse(
        startup_id=wf.startup_id,
        updated_at=wf.updated_at,
        **{name: bool(getattr(wf, name)) for name in STAGE_COLUMNS},
    )


def upsert_workflow(db: Session, startup_id: str, flags: dict[str, bool]) -> StartupWorkflow:
    """Replace every stage flag of a startup's workflow, creating the row if needed."""
    wf = db.get(StartupWorkflow, startup_id)
    if wf is None:
        wf = StartupWorkflow(startup_id=startup_id)
        db.add(wf)
    for name in STAGE_COLUMNS:
        setattr(wf, name, bool(flags.get(name, False)))
    wf.updated_at = utc_now()
    return wf


def progress(wf: StartupWorkflow | None) -> tuple[int, bool]:
    """Return (completed stage count, whether a completed stage follows an open one)."""
    if wf is None:
        return 0, False
    count = 0
    hit_open = False
    has_gap = False
    for done in wf.stage_flags():
        if done:
            count += 1
            if hit_open:
                has_gap = True
        else:
            hit_open = True
    return count, has_gap
