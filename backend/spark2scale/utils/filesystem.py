from pathlib import Path
from spark2scale.config import settings


def ensure_storage_dirs(storage_dir: Path | None = None) -> Path:
    path = storage_dir or settings.storage_dir
    path.mkdir(parents=True, exist_ok=True)
    (path / "startups").mkdir(exist_ok=True)
    return path


def ensure_startup_dirs(startup_id: str, storage_dir: Path | None = None) -> Path:
    path = storage_dir or settings.storage_dir
    startup_dir = path / "startups" / startup_id
    startup_dir.mkdir(parents=True, exist_ok=True)
    (startup_dir / "documents").mkdir(exist_ok=True)
    return startup_dir


def sanitize_filename(name: str) -> str:
    keep = set("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789._-")
    return "".join(c if c in keep else "_" for c in name)


def resolve_stored_path(stored_path: str, storage_dir: Path | None = None) -> Path | None:
    """Map a relative stored path to a file under the storage root, or None if it escapes it."""
    root = (storage_dir or settings.storage_dir).resolve()
    candidate = (root / stored_path).resolve()
    if not candidate.is_relative_to(root):
        return None
    return candidate
