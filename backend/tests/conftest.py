import os
import tempfile

# must be in place before movie_reviews.config is imported
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["USE_SQLITE"] = "true"
os.environ["SQLITE_PATH"] = ":memory:"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="movie_reviews_logs_"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from movie_reviews.auth.tokens import create_access_token
from movie_reviews.db.database import Base, get_db
from movie_reviews.db.models import UserORM
from movie_reviews.domain.models import Role
from movie_reviews.main import app

VALID_PASSWORD = "Passw0rd!"


@pytest.fixture
def session():
    """Create a fresh in-memory SQLite database shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    yield db
    db.close()
    engine.dispose()


@pytest.fixture
def client(session):
    """A test client whose requests all use the test session."""
    def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session):
    """Insert a user directly and return ``(id, bearer headers)``."""
    def _make_user(username: str, role: Role = Role.USER):
        user = UserORM(username=username, hashed_password="not-a-real-hash", role=role.value)
        session.add(user)
        session.commit()
        token = create_access_token(user.id, role)
        return user.id, {"Authorization": f"Bearer {token}"}
    return _make_user


@pytest.fixture
def admin(make_user):
    return make_user("admin_user", Role.ADMIN)


@pytest.fixture
def alice(make_user):
    return make_user("alice_user")


@pytest.fixture
def bob(make_user):
    return make_user("bob_user")
