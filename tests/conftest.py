import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from medcart.db import Base, get_db
from medcart.main import app


def make_record(**overrides):
    record = {
        "id": "med-1",
        "drawerId": "drawer-1",
        "name": "Ondansetron",
        "dosage": "4 mg (2 mL)",
        "form": "Injection",
        "route": "IV",
        "classification": "Antiemetic",
        "itemType": "medication",
        "prepMethod": "syringe",
        "prepTargetAmount": "2.5",
        "prepTargetUnit": "mL",
        "prepMaxAmount": None,
    }
    record.update(overrides)
    return record


@pytest.fixture
def syringe_record():
    return make_record()


@pytest.fixture
def cup_record():
    return make_record(
        id="med-2", name="Metoprolol", dosage="50 mg", form="Tablet", route="PO",
        prepMethod="cup", prepTargetAmount="2", prepTargetUnit="tablets",
    )


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
