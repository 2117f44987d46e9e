import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from spark2scale.client.api import Spark2ScaleAPI
from spark2scale.config import settings
from spark2scale.database import get_db
from spark2scale.main import app


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def tmp_data(tmp_path):
    data_path = tmp_path / "Spark2Scale"
    data_path.mkdir()
    return data_path


@pytest.fixture
def test_db(tmp_data):
    db_path = tmp_data / "db.sqlite"
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    from spark2scale.database import init_db
    init_db(db_path)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture
def client(tmp_data, test_db):
    original_data_path = settings.data_path
    settings.data_path = tmp_data
    c = TestClient(app)
    yield c
    settings.data_path = original_data_path


@pytest.fixture
def startup_id(client):
    r = client.post("/api/startups", json={
        "startupname": "Acme Robotics",
        "idea_description": "Warehouse robots for small retailers",
    })
    return r.json()["sid"]


@pytest_asyncio.fixture
async def asgi_api(client):
    """Client-side core wired to the real app in-process."""
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app)) as http:
        yield Spark2ScaleAPI(base_url="http://testserver/api", client=http)


@pytest_asyncio.fixture
async def stub_api():
    """Factory for a client-side core wired to a stub collaborator."""
    opened: list[httpx.AsyncClient] = []

    def _make(handler) -> Spark2ScaleAPI:
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        opened.append(http)
        return Spark2ScaleAPI(base_url="http://collab.test/api", client=http)

    yield _make
    for http in opened:
        await http.aclose()
