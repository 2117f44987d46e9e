import logging
import sqlite3
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from spark2scale import __version__
from spark2scale.config import settings
from spark2scale.database import init_db
from spark2scale.routers import documents, files, startups, workflow
from spark2scale.utils.filesystem import ensure_storage_dirs

logger = logging.getLogger("spark2scale")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create/migrate the database and integrity-check it
    ensure_storage_dirs()
    init_db()
    try:
        conn = sqlite3.connect(str(settings.db_path))
        result = conn.execute("PRAGMA integrity_check").fetchone()
        conn.close()
    except sqlite3.Error as exc:
        logger.error("Could not run startup integrity check: %s", exc)
    else:
        if result and result[0] == "ok":
            logger.info("Database integrity check passed.")
        else:
            logger.error("DATABASE INTEGRITY CHECK FAILED: %s", result)
    yield


app = FastAPI(
    title="Spark2Scale",
    description="Startup documents, version history and workflow-stage tracking",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(startups.router, prefix=settings.api_prefix)
app.include_router(documents.router, prefix=settings.api_prefix)
app.include_router(workflow.router, prefix=settings.api_prefix)
app.include_router(files.router, prefix=settings.api_prefix)


@app.get("/health")
async def health():
    return {"status": "ok", "version": __version__}
