import os

# The engine in qbank_admin.infrastructure.db.session is built at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from qbank_admin.application.admin.seed_reference_data import seed_reference_data
from qbank_admin.infrastructure import config
from qbank_admin.infrastructure.db.base import Base
from qbank_admin.infrastructure.db.models import QuestionType, InternalType
from qbank_admin.infrastructure.db.session import create_db_engine
from qbank_admin.infrastructure.repositories.question_repo_impl import create_question
from qbank_admin.presentation.dependencies import get_db
from qbank_admin.presentation.schemas.question_schema import QuestionCreate


@pytest.fixture
def engine():
    engine = create_db_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def ref(db):
    """Seeded reference types, keyed by role."""
    seed_reference_data(db)

    def type_id(name):
        return db.query(QuestionType).filter(QuestionType.type_name == name).one().type_id

    def internal_id(name):
        return db.query(InternalType).filter(InternalType.internal_name == name).one().internal_type_id

    return SimpleNamespace(
        verbal=type_id(config.VERBAL_TYPE_NAME),
        quant=type_id(config.QUANT_TYPE_NAME),
        reading=internal_id(config.READING_COMPREHENSION_NAME),
        analogies=internal_id(config.VERBAL_ANALOGIES_NAME),
        completion=internal_id(config.SENTENCE_COMPLETION_NAME),
        contextual=internal_id(config.CONTEXTUAL_ERROR_NAME),
        algebra=internal_id("جبر"),
    )


@pytest.fixture
def make_question(db, ref):
    """Create a verbal reading-comprehension question unless overridden."""

    def _make(**overrides):
        data = {
            "question_text": "What does the passage say about water?",
            "mc_a": "It boils",
            "mc_b": "It freezes",
            "mc_c": "It flows",
            "mc_d": "Nothing",
            "mc_correct": "C",
            "type_id": ref.verbal,
            "internal_type_id": ref.reading,
        }
        data.update(overrides)
        return create_question(db, QuestionCreate(**data))

    return _make


@pytest.fixture
def client(session_factory, ref):
    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def question_payload(ref):
    def _payload(**overrides):
        payload = {
            "questionTitle": "Water cycle",
            "questionText": "Which stage follows evaporation?",
            "mcA": "Condensation",
            "mcB": "Precipitation",
            "mcC": "Collection",
            "mcD": "Runoff",
            "mcCorrect": "A",
            "typeId": ref.verbal,
            "internalTypeId": ref.reading,
        }
        payload.update(overrides)
        return payload

    return _payload
