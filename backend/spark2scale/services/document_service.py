import os
import uuid
from pathlib import Path

from sqlalchemy.orm import Session

from spark2scale.config import settings
from spark2scale.models.document import Document
from spark2scale.models.document_version import DocumentVersion
from spark2scale.utils.filesystem import ensure_startup_dirs, resolve_stored_path, sanitize_filename
from spark2scale.utils.hashing import sha256_bytes
from spark2scale.utils.timestamps import utc_now

REQUIRED_DOC_TYPES = ["Pitch Deck", "Financials", "Cap Table", "Legal Docs", "Business Plan"]


def store_document(startup_id: str, filename: str, content: bytes) -> tuple[str, str, int]:
    """Store a document blob immutably. Returns (relative_path, file_hash, file_size)."""
    file_hash = sha256_bytes(content)
    safe_name = sanitize_filename(filename)
    stored_name = f"{uuid.uuid4().hex[:12]}_{safe_name}"

    startup_dir = ensure_startup_dirs(startup_id)
    doc_path = startup_dir / "documents" / stored_name
    doc_path.write_bytes(content)
    os.chmod(doc_path, 0o444)

    relative_path = f"startups/{startup_id}/documents/{stored_name}"
    return relative_path, file_hash, len(content)


def get_document_full_path(stored_path: str, storage_dir: Path | None = None) -> Path | None:
    return resolve_stored_path(stored_path, storage_dir)


def public_url(relative_path: str) -> str:
    return f"{settings.public_base_url.rstrip('/')}{settings.api_prefix}/files/{relative_path}"


def find_current_by_type(db: Session, startup_id: str, doc_type: str) -> Document | None:
    return (
        db.query(Document)
        .filter(
            Document.startup_id == startup_id,
            Document.type == doc_type,
            Document.is_current.is_(True),
        )
        .order_by(Document.updated_at.desc())
        .first()
    )


def add_version(
    db: Session,
    doc: Document,
    stored_path: str,
    file_hash: str,
    mime_type: str | None,
    generated_by: str,
) -> DocumentVersion:
    """Append a new version to an existing document and move its current pointer forward."""
    now = utc_now()
    new_version = doc.current_version + 1
    url = public_url(stored_path)
    version = DocumentVersion(
        vid=str(uuid.uuid4()),
        document_id=doc.did,
        startup_id=doc.startup_id,
        version_number=new_version,
        path=url,
        stored_path=stored_path,
        generated_by=generated_by,
        created_at=now,
    )
    db.add(version)

    doc.current_path = url
    doc.current_version = new_version
    doc.file_hash = file_hash
    doc.mime_type = mime_type
    doc.updated_at = now
    return version


def create_document(
    db: Session,
    startup_id: str,
    document_name: str,
    doc_type: str,
    stored_path: str,
    file_hash: str,
    mime_type: str | None,
    generated_by: str,
) -> Document:
    """Create a new document lineage at version 1."""
    now = utc_now()
    url = public_url(stored_path)
    doc = Document(
        did=str(uuid.uuid4()),
        startup_id=startup_id,
        document_name=document_name,
        type=doc_type,
        current_path=url,
        current_version=1,
        canaccess=1,
        is_current=True,
        file_hash=file_hash,
        mime_type=mime_type,
        updated_at=now,
        created_at=now,
    )
    db.add(doc)
    db.add(DocumentVersion(
        vid=str(uuid.uuid4()),
        document_id=doc.did,
        startup_id=startup_id,
        version_number=1,
        path=url,
        stored_path=stored_path,
        generated_by=generated_by,
        created_at=now,
    ))
    return doc


def missing_required_types(uploaded_types: list[str]) -> list[str]:
    uploaded = {t.lower() for t in uploaded_types}
    return [t for t in REQUIRED_DOC_TYPES if t.lower() not in uploaded]
