import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from assetdesk.main import app
from assetdesk.database import Base, get_db
from assetdesk.models.user import User
from assetdesk.routers.auth import _login_attempts
from assetdesk.services.user_service import hash_password

TEST_DB_URL = "sqlite:///:memory:"

REFERENCE_ID = "REF-001"


@pytest.fixture(scope="function")
def session_factory():
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,  # Ensure all connections share same in-memory DB
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine)
    Base.metadata.drop_all(engine)


@pytest.fixture(scope="function")
def anon_client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    db = session_factory()
    user = User(
        email="admin@test.com",
        hashed_password=hash_password("admin123"),
        role="admin",
        firstname="Ada",
        lastname="Admin",
        reference_id=REFERENCE_ID,
    )
    db.add(user)
    db.commit()
    db.close()

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client(anon_client):
    res = anon_client.post("/api/auth/login", json={"email": "admin@test.com", "password": "admin123"})
    assert res.status_code == 200
    yield anon_client


@pytest.fixture(autouse=True)
def reset_login_attempts():
    _login_attempts.clear()
    yield
    _login_attempts.clear()
