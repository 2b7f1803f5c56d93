import os
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Must be set before importing jobtracker.config so a developer's .env can't
# point the tests at a real database.
os.environ["DISABLE_DOTENV"] = "1"

TEST_SECRET = "test-secret"


@pytest.fixture()
def secret_key() -> str:
    return TEST_SECRET


@pytest.fixture()
def test_db_url(tmp_path: Path) -> str:
    return f"sqlite:///{(tmp_path / 'test.sqlite3').as_posix()}"


@pytest.fixture()
def engine(test_db_url: str):
    from jobtracker.database import create_db_engine, init_db

    engine = create_db_engine(test_db_url)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db_session(engine):
    """
    Direct SQLAlchemy session bound to the temporary SQLite DB.
    """
    from jobtracker.database import create_session_factory

    db = create_session_factory(engine)()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def accounts(db_session):
    from jobtracker.services.accounts import AccountStore

    return AccountStore(db_session, secret_key=TEST_SECRET)


@pytest.fixture()
def jobs(db_session):
    from jobtracker.services.jobs import JobStore

    return JobStore(db_session)


@pytest.fixture()
def app(test_db_url: str) -> FastAPI:
    """
    Create the FastAPI app wired to the temporary SQLite DB.
    """
    from jobtracker.main import create_app

    return create_app(database_url=test_db_url, secret_key=TEST_SECRET)


@pytest.fixture()
def client(app: FastAPI):
    # Entering the context runs the lifespan (engine + schema).
    with TestClient(app) as test_client:
        yield test_client
