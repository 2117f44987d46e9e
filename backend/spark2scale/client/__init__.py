from spark2scale.client.aggregator import LATEST, aggregate, resolve_view_path, version_options
from spark2scale.client.api import Spark2ScaleAPI
from spark2scale.client.documents import DocumentGroupsResult, load_document_groups
from spark2scale.client.errors import (
    ConflictOrUpstreamError,
    InvalidInput,
    PartialHistoryUnavailable,
    Spark2ScaleError,
    UpstreamUnavailable,
)
from spark2scale.client.records import DocumentGroup, DocumentRecord, VersionRecord
from spark2scale.client.workflow import (
    ArtifactRef,
    StageControls,
    StageName,
    StageState,
    WorkflowStage,
    WorkflowStageController,
)

__all__ = [
    "LATEST",
    "aggregate",
    "resolve_view_path",
    "version_options",
    "Spark2ScaleAPI",
    "DocumentGroupsResult",
    "load_document_groups",
    "ConflictOrUpstreamError",
    "InvalidInput",
    "PartialHistoryUnavailable",
    "Spark2ScaleError",
    "UpstreamUnavailable",
    "DocumentGroup",
    "DocumentRecord",
    "VersionRecord",
    "ArtifactRef",
    "StageControls",
    "StageName",
    "StageState",
    "WorkflowStage",
    "WorkflowStageController",
]
