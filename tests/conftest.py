"""Pytest fixtures for engine, service and API tests."""

import os
from collections.abc import AsyncGenerator, Generator

os.environ.setdefault("DATABASE_URL", "sqlite://")

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from vocab_progress.api.deps import get_db
from vocab_progress.db.base import Base
from vocab_progress.db.models import User, VocabularyWord
from vocab_progress.main import create_app


@pytest.fixture(scope="session")
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine, tables=[User.__table__, VocabularyWord.__table__])
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine, tables=[VocabularyWord.__table__, User.__table__])


@pytest.fixture()
def db_session(db_engine) -> Generator[Session, None, None]:
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.query(User).delete()
        db.query(VocabularyWord).delete()
        db.commit()
        db.close()


@pytest.fixture()
def client(db_session: Session) -> Generator[TestClient, None, None]:
    app = create_app()

    def override_get_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture()
async def async_client(db_session: Session) -> AsyncGenerator[httpx.AsyncClient, None]:
    app = create_app()

    async def override_get_db() -> AsyncGenerator[Session, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture()
def learner(db_session) -> User:
    user = User(email="learner@example.com", display_name="Learner")
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture()
def portuguese_vocabulary(db_session) -> list[VocabularyWord]:
    words = [
        VocabularyWord(
            portuguese="casa",
            english="house",
            part_of_speech="noun",
            gender="feminine",
            group="Home",
            examples=["A casa é grande."],
        ),
        VocabularyWord(
            portuguese="obrigado",
            english="thank you",
            part_of_speech="interjection",
            group="Greetings",
        ),
        VocabularyWord(
            portuguese="rua",
            english="street",
            part_of_speech="noun",
            gender="feminine",
        ),
    ]
    db_session.add_all(words)
    db_session.commit()
    return words
