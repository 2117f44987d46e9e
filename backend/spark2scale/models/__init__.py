from spark2scale.models.startup import Startup
from spark2scale.models.document import Document
from spark2scale.models.document_version import DocumentVersion
from spark2scale.models.workflow import StartupWorkflow

__all__ = ["Startup", "Document", "DocumentVersion", "StartupWorkflow"]
