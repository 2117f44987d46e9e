from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DocumentResponse(BaseModel):
    did: str
    startup_id: str
    document_name: str
    type: str
    current_path: str | None
    current_version: int
    canaccess: int
    is_current: bool
    updated_at: str
    created_at: str


class DocumentVersionResponse(BaseModel):
    vid: str
    document_id: str
    startup_id: str
    version_number: int
    path: str
    generated_by: str
    created_at: str


class GenerateMockRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    startup_id: str
    type: str
    region: str | None = None
    category: str | None = None


class GenerateMockResponse(BaseModel):
    message: str
    version: int
    document: DocumentResponse


class CompletionResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_complete: bool
    missing_docs: list[str] = []
