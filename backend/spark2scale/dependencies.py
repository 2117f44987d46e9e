import uuid

from fastapi import HTTPException
from sqlalchemy.orm import Session

from spark2scale.models.startup import Startup


def parse_uuid(value: str | None) -> str | None:
    """Canonical form of a UUID string, or None when it does not parse."""
    try:
        return str(uuid.UUID(str(value)))
    except (TypeError, ValueError):
        return None


def require_uuid(value: str | None, label: str = "ID") -> str:
    """Normalize a path/query id or reject it with 400, mirroring the upstream contract."""
    parsed = parse_uuid(value)
    if parsed is None:
        raise HTTPException(status_code=400, detail=f"Invalid {label} format: {value}")
    return parsed


def get_startup_or_404(db: Session, sid: str) -> Startup:
    startup = db.get(Startup, sid)
    if not startup:
        raise HTTPException(status_code=404, detail="Startup not found")
    return startup
