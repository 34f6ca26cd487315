"""Pytest configuration and fixtures for tests."""

import pytest
from sqlalchemy.orm import Session, sessionmaker

from leadmatch.database import Base, build_engine
from leadmatch.models.property import Property
from leadmatch.schemas.conversation import ConversationTurn


@pytest.fixture(scope="session")
def engine():
    """Create an in-memory SQLite database for tests."""
    engine = build_engine("sqlite:///:memory:")
    # Import all models so they're registered
    import leadmatch.models  # noqa: F401

    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def db(engine) -> Session:
    """Provide a database session whose rows are removed after each test."""
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.query(Property).delete()
        session.commit()
        session.close()


def make_turns(*messages: tuple[str, str]) -> list[ConversationTurn]:
    """Build turns from ``(role, text)`` pairs in order."""
    return [
        ConversationTurn(role=role, text=text, position=i)
        for i, (role, text) in enumerate(messages)
    ]


@pytest.fixture
def add_property(db: Session):
    """Insert a catalog property with sensible defaults."""

    def _add(**overrides) -> Property:
        values = dict(
            title="Departamento en Roma Norte",
            price=3_000_000.0,
            city="CDMX",
            area="Roma Norte",
            bedrooms=2,
            bathrooms=2,
            property_type="departamento",
            is_active=True,
        )
        values.update(overrides)
        prop = Property(**values)
        db.add(prop)
        db.commit()
        db.refresh(prop)
        return prop

    return _add
