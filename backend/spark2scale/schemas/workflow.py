from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WorkflowFlags(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    idea_check: bool = False
    market_research: bool = False
    evaluation: bool = False
    recommendation: bool = False
    documents: bool = False
    pitch_deck: bool = False


class WorkflowUpdate(WorkflowFlags):
    # Kept as a string so a malformed id is reported as 400, not a validation error.
    startup_id: str
    updated_at: str | None = None


class WorkflowResponse(WorkflowFlags):
    startup_id: str
    updated_at: str
