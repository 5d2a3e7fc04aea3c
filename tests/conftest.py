"""Pytest configuration

Shared fixtures: an in-memory SQLite database per test, a session bound to
it, a FastAPI TestClient using that session, and a few seeded records.
"""

import os
import tempfile
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment before the app is imported
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="salesreports-uploads-"))
os.environ.pop("ANTHROPIC_API_KEY", None)


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
def db_engine():
    """Create in-memory test database engine."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    from salesreports.database import Base
    import salesreports.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(db_engine) -> Generator[Session, None, None]:
    """Session on the test database."""
    TestSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestSession()
    yield session
    session.rollback()
    session.close()


# ============================================================================
# Application & Client Fixtures
# ============================================================================

@pytest.fixture
def client(db) -> TestClient:
    """TestClient whose requests share the test session."""
    from salesreports.main import app
    from salesreports.database import get_db

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# ============================================================================
# Model Fixtures
# ============================================================================

@pytest.fixture
def region(db):
    from salesreports.models import Region

    region = Region(name="West")
    db.add(region)
    db.commit()
    return region


@pytest.fixture
def director(db, region):
    from salesreports.models import Director

    director = Director(
        name="Dana Reyes",
        email="dana@example.com",
        region=region.name,
        region_id=region.id,
    )
    db.add(director)
    db.commit()
    return director


@pytest.fixture
def other_director(db):
    from salesreports.models import Director

    director = Director(name="Sam Patel", email="sam@example.com", region="East")
    db.add(director)
    db.commit()
    return director
