"""
Document version aggregation.

Collapses a flat list of document records into one group per document type:
the most recently updated record supplies the card's fields and every
record's history is merged into a single, de-duplicated, newest-first list.
"""
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from spark2scale.client.errors import InvalidInput
from spark2scale.client.records import DocumentGroup, DocumentRecord, VersionRecord

LATEST = "latest"


def coerce_record(raw: DocumentRecord | Mapping[str, Any]) -> DocumentRecord:
    if isinstance(raw, DocumentRecord):
        if not raw.owner_type or not raw.owner_type.strip():
            raise InvalidInput(f"Document {raw.id} has no owner type")
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidInput(f"Expected a document record, got {type(raw).__name__}")
    try:
        return DocumentRecord.model_validate(raw)
    except ValidationError as exc:
        raise InvalidInput(f"Malformed document record: {exc}") from exc


def _merge_versions(versions: list[VersionRecord]) -> tuple[VersionRecord, ...]:
    # Last occurrence of an id wins; sorted() is stable so equal timestamps keep input order.
    unique = {v.id: v for v in versions}
    return tuple(sorted(unique.values(), key=lambda v: v.created_at, reverse=True))


def aggregate(records: Iterable[DocumentRecord | Mapping[str, Any]]) -> list[DocumentGroup]:
    """Group records by owner type, in order of first appearance.

    A later record replaces the representative only when its ``updated_at``
    is strictly newer, so on equal timestamps the first record seen stays.
    """
    representatives: dict[str, DocumentRecord] = {}
    histories: dict[str, list[VersionRecord]] = {}

    for raw in records:
        record = coerce_record(raw)
        key = record.owner_type
        current = representatives.get(key)
        if current is None:
            representatives[key] = record
            histories[key] = list(record.versions)
            continue
        histories[key].extend(record.versions)
        if record.updated_at > current.updated_at:
            representatives[key] = record

    return [
        DocumentGroup(
            owner_type=key,
            id=rep.id,
            name=rep.name,
            path=rep.path,
            updated_at=rep.updated_at,
            is_current=rep.is_current,
            versions=_merge_versions(histories[key]),
        )
        for key, rep in representatives.items()
    ]


def resolve_view_path(group: DocumentGroup, selected: str | None = None) -> str | None:
    """Path to open for a selection; unknown or ``LATEST`` selections fall back to the group's path."""
    if selected is None or selected == LATEST:
        return group.path
    for version in group.versions:
        if version.id == selected:
            return version.path or group.path
    return group.path


def version_options(group: DocumentGroup) -> list[tuple[str, str]]:
    """(value, label) pairs for a version picker, latest first."""
    options = [(LATEST, "Latest")]
    options.extend((v.id, f"v{v.version_number}") for v in group.versions)
    return options
