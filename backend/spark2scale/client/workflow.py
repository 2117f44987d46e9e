"""
Per-stage workflow controller.

A stage moves NotGenerated -> Generated -> Completed. A successful
regeneration always drops it back to Generated so the new artifact is
reviewed before the stage is completed again. The completion flag in
storage is only written by complete_stage.
"""
import logging
from contextlib import asynccontextmanager
from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from spark2scale.client.api import Spark2ScaleAPI
from spark2scale.client.errors import (
    ConflictOrUpstreamError,
    InvalidInput,
    Spark2ScaleError,
    UpstreamUnavailable,
)

logger = logging.getLogger(__name__)


class StageName(str, Enum):
    IDEA_CHECK = "idea_check"
    MARKET_RESEARCH = "market_research"
    EVALUATION = "evaluation"
    RECOMMENDATION = "recommendation"
    DOCUMENTS = "documents"
    PITCH_DECK = "pitch_deck"

    @property
    def wire_key(self) -> str:
        """Key of this stage's flag in the workflow record."""
        return to_camel(self.value)

    @property
    def artifact_type(self) -> str | None:
        """Document type of the artifact this stage generates, if any."""
        return ARTIFACT_TYPES.get(self)


ARTIFACT_TYPES = {
    StageName.MARKET_RESEARCH: "Market Research",
    StageName.EVALUATION: "Evaluation",
    StageName.RECOMMENDATION: "Recommendation",
}


class StageState(str, Enum):
    NOT_GENERATED = "not_generated"
    GENERATED = "generated"
    COMPLETED = "completed"


class WorkflowStage(BaseModel):
    model_config = ConfigDict(frozen=True)

    startup_id: str
    stage_name: StageName
    artifact_exists: bool = False
    completed: bool = False

    @property
    def state(self) -> StageState:
        if self.completed:
            return StageState.COMPLETED
        if self.artifact_exists:
            return StageState.GENERATED
        return StageState.NOT_GENERATED


class ArtifactRef(BaseModel):
    startup_id: str
    type: str
    version: int | None = None
    document_id: str | None = None
    message: str | None = None


class StageControls(BaseModel):
    generate_label: str
    generate_enabled: bool
    complete_label: str
    complete_enabled: bool
    error: str | None = None


class WorkflowStageController:
    """Tracks one stage of one startup and gates its generate/complete actions."""

    def __init__(self, api: Spark2ScaleAPI, startup_id: str, stage_name: StageName | str):
        self.api = api
        self.stage = WorkflowStage(startup_id=startup_id, stage_name=StageName(stage_name))
        self.busy = False
        self.error: str | None = None
        # Set by a successful generation, cleared only by a successful completion.
        self.needs_review = False

    @property
    def startup_id(self) -> str:
        return self.stage.startup_id

    @property
    def stage_name(self) -> StageName:
        return self.stage.stage_name

    def _update(self, **changes) -> WorkflowStage:
        self.stage = self.stage.model_copy(update=changes)
        return self.stage

    @asynccontextmanager
    async def _running(self, action: str):
        self.busy = True
        self.error = None
        try:
            yield
        except Spark2ScaleError as exc:
            self.error = f"Could not {action}: {exc}"
            raise
        finally:
            self.busy = False

    async def _read_record(self) -> dict:
        try:
            return await self.api.get_workflow(self.startup_id)
        except UpstreamUnavailable as exc:
            if exc.status_code == 404:
                return {}
            raise

    async def get_status(self) -> WorkflowStage:
        """Refresh the view from storage.

        On UpstreamUnavailable the view falls back to not completed before
        the error propagates.
        """
        async with self._running("load stage status"):
            try:
                record = await self._read_record()
                artifact_exists = self.stage.artifact_exists
                artifact_type = self.stage_name.artifact_type
                if artifact_type is not None:
                    documents = await self.api.list_documents(self.startup_id)
                    artifact_exists = any(
                        str(doc.get("type", "")).lower() == artifact_type.lower()
                        and doc.get("is_current", True) is not False
                        for doc in documents
                    )
            except UpstreamUnavailable as exc:
                logger.warning("Status of %s for %s unavailable: %s", self.stage_name.value, self.startup_id, exc)
                self._update(completed=False)
                raise
            return self._update(
                artifact_exists=artifact_exists,
                completed=record.get(self.stage_name.wire_key) is True and not self.needs_review,
            )

    async def generate_artifact(self) -> ArtifactRef:
        """Generate (or regenerate) this stage's artifact. Never retried."""
        artifact_type = self.stage_name.artifact_type
        if artifact_type is None:
            raise InvalidInput(f"Stage {self.stage_name.value} has no generated artifact")

        async with self._running("generate"):
            try:
                payload = await self.api.generate_mock(self.startup_id, artifact_type)
            except UpstreamUnavailable as exc:
                logger.warning("Generating %s for %s failed: %s", artifact_type, self.startup_id, exc)
                raise
            # Storage keeps its completion flag until complete_stage runs again.
            self.needs_review = True
            self._update(artifact_exists=True, completed=False)

        document = payload.get("document") or {}
        return ArtifactRef(
            startup_id=self.startup_id,
            type=artifact_type,
            version=payload.get("version"),
            document_id=document.get("did"),
            message=payload.get("message"),
        )

    async def complete_stage(self) -> WorkflowStage:
        """Mark the stage done with a read-modify-write of the whole workflow record.

        Re-reading first keeps sibling stage flags intact. Repeating the call
        on a completed stage performs the same round trip and succeeds.
        """
        async with self._running("complete stage"):
            try:
                record = await self.api.get_workflow(self.startup_id)
                updated = {**record, "startupId": self.startup_id, self.stage_name.wire_key: True}
                await self.api.update_workflow(updated)
            except UpstreamUnavailable as exc:
                logger.warning("Completing %s for %s failed: %s", self.stage_name.value, self.startup_id, exc)
                self._update(completed=False)
                raise ConflictOrUpstreamError(
                    f"Workflow update for {self.stage_name.value} failed: {exc}"
                ) from exc
            self.needs_review = False
            return self._update(completed=True)

    def controls(self) -> StageControls:
        """Button labels and enabled flags for the stage page."""
        can_generate = self.stage_name.artifact_type is not None
        ready = self.stage.artifact_exists or not can_generate
        return StageControls(
            generate_label="Regenerate" if self.stage.artifact_exists else "Generate",
            generate_enabled=can_generate and not self.busy,
            complete_label="Completed" if self.stage.completed else "Mark as Complete",
            complete_enabled=ready and not self.stage.completed and not self.busy,
            error=self.error,
        )
