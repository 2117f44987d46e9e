"""
View-model records for documents and their version histories.

Raw collaborator payloads use the storage service's wire names
(``did``, ``type``, ``document_name``, ``current_path``, ``vid`` ...).
Validation maps them onto Python names and normalizes them once, here:
timestamps become timezone-aware and a missing ``is_current`` means current.
"""
from datetime import datetime, timezone

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class VersionRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(validation_alias=AliasChoices("id", "vid"))
    version_number: int = Field(default=0, validation_alias=AliasChoices("version_number", "versionNumber"))
    path: str | None = None
    created_at: datetime = Field(validation_alias=AliasChoices("created_at", "createdAt"))
    generated_by: str | None = Field(default=None, validation_alias=AliasChoices("generated_by", "generatedBy"))
    document_id: str | None = Field(default=None, validation_alias=AliasChoices("document_id", "documentId"))

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)


class DocumentRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(validation_alias=AliasChoices("id", "did"))
    owner_type: str = Field(validation_alias=AliasChoices("owner_type", "ownerType", "type"))
    name: str = Field(default="", validation_alias=AliasChoices("name", "document_name"))
    path: str | None = Field(default=None, validation_alias=AliasChoices("path", "current_path"))
    updated_at: datetime = Field(validation_alias=AliasChoices("updated_at", "updatedAt"))
    is_current: bool = Field(default=True, validation_alias=AliasChoices("is_current", "isCurrent"))
    startup_id: str | None = None
    current_version: int | None = None
    versions: tuple[VersionRecord, ...] = ()

    @field_validator("updated_at")
    @classmethod
    def updated_at_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)

    @field_validator("owner_type")
    @classmethod
    def owner_type_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("owner_type must not be blank")
        return value

    @field_validator("is_current", mode="before")
    @classmethod
    def missing_means_current(cls, value):
        # The document list only returns current documents, so an absent flag means current.
        return True if value is None else value


class DocumentGroup(BaseModel):
    """One card per document type: the latest record's fields plus the merged history."""

    model_config = ConfigDict(frozen=True)

    owner_type: str
    id: str
    name: str
    path: str | None
    updated_at: datetime
    is_current: bool
    versions: tuple[VersionRecord, ...] = ()
