import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from spark2scale.config import settings
from spark2scale.database import get_db
from spark2scale.dependencies import get_startup_or_404, parse_uuid, require_uuid
from spark2scale.models.document import Document
from spark2scale.models.document_version import DocumentVersion
from spark2scale.schemas.document import (
    CompletionResponse,
    DocumentResponse,
    DocumentVersionResponse,
    GenerateMockRequest,
    GenerateMockResponse,
)
from spark2scale.services.artifact_service import generate_artifact_pdf
from spark2scale.services.document_service import (
    add_version,
    create_document,
    find_current_by_type,
    missing_required_types,
    store_document,
)
from spark2scale.utils.hashing import sha256_bytes
from spark2scale.utils.timestamps import utc_now

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


def _doc_to_response(doc: Document) -> DocumentResponse:
    return DocumentResponse(
        did=doc.did,
        startup_id=doc.startup_id,
        document_name=doc.document_name,
        type=doc.type,
        current_path=doc.current_path,
        current_version=doc.current_version,
        canaccess=doc.canaccess,
        is_current=bool(doc.is_current),
        updated_at=doc.updated_at,
        created_at=doc.created_at,
    )


def _version_to_response(v: DocumentVersion) -> DocumentVersionResponse:
    return DocumentVersionResponse(
        vid=v.vid,
        document_id=v.document_id,
        startup_id=v.startup_id,
        version_number=v.version_number,
        path=v.path,
        generated_by=v.generated_by,
        created_at=v.created_at,
    )


@router.get("", response_model=list[DocumentResponse])
async def list_documents(startupId: str, db: Session = Depends(get_db)):
    sid = require_uuid(startupId, "Startup ID")
    docs = (
        db.query(Document)
        .filter(Document.startup_id == sid, Document.is_current.is_(True))
        .order_by(Document.updated_at.desc())
        .all()
    )
    return [_doc_to_response(d) for d in docs]


@router.get("/check-completion/{startupId}", response_model=CompletionResponse)
async def check_completion(startupId: str, db: Session = Depends(get_db)):
    """Report which of the required document types have not been uploaded yet."""
    sid = require_uuid(startupId, "Startup ID")
    uploaded = [t for (t,) in db.query(Document.type).filter(Document.startup_id == sid).all()]
    missing = missing_required_types(uploaded)
    return CompletionResponse(is_complete=not missing, missing_docs=missing)


@router.get("/history/{documentId}", response_model=list[DocumentVersionResponse])
async def document_history(documentId: str, db: Session = Depends(get_db)):
    did = require_uuid(documentId, "Document ID")
    versions = (
        db.query(DocumentVersion)
        .filter(DocumentVersion.document_id == did)
        .order_by(DocumentVersion.version_number.desc())
        .all()
    )
    return [_version_to_response(v) for v in versions]


@router.post("/upload", response_model=DocumentResponse, status_code=201)
async def upload_document(
    file: UploadFile = File(...),
    startup_id: str = Form(..., alias="startupId"),
    doc_name: str = Form(..., alias="docName"),
    doc_type: str = Form(..., alias="type"),
    document_id: str | None = Form(None, alias="documentId"),
    db: Session = Depends(get_db),
):
    sid = require_uuid(startup_id, "Startup ID")
    get_startup_or_404(db, sid)
    if not doc_type.strip():
        raise HTTPException(status_code=400, detail="Document type is required")

    # Enforce upload size limit before buffering the whole file.
    max_bytes = settings.max_upload_bytes
    size = 0
    chunks: list[bytes] = []
    while True:
        chunk = await file.read(1024 * 1024)
        if not chunk:
            break
        size += len(chunk)
        if size > max_bytes:
            raise HTTPException(status_code=413, detail=f"File too large (max {max_bytes} bytes)")
        chunks.append(chunk)

    content = b"".join(chunks)
    if not content:
        raise HTTPException(status_code=400, detail="No file.")

    existing = None
    if document_id:
        did = parse_uuid(document_id)
        if did is not None:
            existing = db.query(Document).filter(Document.did == did, Document.startup_id == sid).first()
        if existing is None:
            logger.info("Upload referenced unknown document %s; creating a new lineage", document_id)

    if existing is not None and existing.file_hash == sha256_bytes(content):
        raise HTTPException(status_code=409, detail="File is identical to the current version")

    stored_path, file_hash, _ = store_document(sid, file.filename or "upload", content)

    if existing is not None:
        add_version(db, existing, stored_path, file_hash, file.content_type, generated_by="manual")
        doc = existing
    else:
        doc = create_document(
            db,
            startup_id=sid,
            document_name=doc_name.strip() or (file.filename or doc_type),
            doc_type=doc_type.strip(),
            stored_path=stored_path,
            file_hash=file_hash,
            mime_type=file.content_type,
            generated_by="manual",
        )

    db.commit()
    db.refresh(doc)
    return _doc_to_response(doc)


@router.post("/generate-mock", response_model=GenerateMockResponse)
async def generate_mock(req: GenerateMockRequest, db: Session = Depends(get_db)):
    """Produce a mocked AI artifact of the given type as a new document or a new version."""
    sid = require_uuid(req.startup_id, "Startup ID")
    startup = get_startup_or_404(db, sid)
    doc_type = req.type.strip()
    if not doc_type:
        raise HTTPException(status_code=400, detail="Document type is required")

    existing = find_current_by_type(db, sid, doc_type)
    version = existing.current_version + 1 if existing else 1

    content = generate_artifact_pdf(
        startup_id=sid,
        startup_name=startup.startupname,
        artifact_type=doc_type,
        version=version,
        generated_at=utc_now(),
        idea_description=startup.idea_description,
        region=req.region,
        category=req.category,
    )
    filename = f"{doc_type}_v{version}.pdf"
    stored_path, file_hash, _ = store_document(sid, filename, content)

    if existing is not None:
        add_version(db, existing, stored_path, file_hash, "application/pdf", generated_by="AI")
        doc = existing
        message = "AI generated new version"
    else:
        doc = create_document(
            db,
            startup_id=sid,
            document_name=f"{doc_type} (AI Generated)",
            doc_type=doc_type,
            stored_path=stored_path,
            file_hash=file_hash,
            mime_type="application/pdf",
            generated_by="AI",
        )
        message = "AI generated document"

    db.commit()
    db.refresh(doc)
    logger.info("Generated %s v%d for startup %s", doc_type, doc.current_version, sid)
    return GenerateMockResponse(message=message, version=doc.current_version, document=_doc_to_response(doc))


@router.delete("/{documentId}")
async def delete_document(documentId: str, db: Session = Depends(get_db)):
    did = require_uuid(documentId, "Document ID")
    doc = db.get(Document, did)
    if not doc:
        raise HTTPException(status_code=404, detail="Document not found")
    db.delete(doc)
    db.commit()
    return {"message": "Document deleted"}
