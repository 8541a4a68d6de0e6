# backend/medcart/db.py
import uuid

from sqlalchemy import create_engine, Column, Integer, String, Text, Boolean
from sqlalchemy.orm import sessionmaker, declarative_base

from medcart.config import DATABASE_URL


def _connect_args(url: str) -> dict:
    return {"check_same_thread": False} if url.startswith("sqlite") else {}


def _new_id() -> str:
    return str(uuid.uuid4())


engine = create_engine(DATABASE_URL, connect_args=_connect_args(DATABASE_URL))
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
Base = declarative_base()


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=_new_id)
    username = Column(String, nullable=False, unique=True)
    password = Column(String, nullable=False)


class Drawer(Base):
    __tablename__ = "drawers"

    id = Column(String, primary_key=True, default=_new_id)
    label = Column(String, nullable=False)
    position = Column(Integer, nullable=False, index=True)
    color = Column(String, nullable=False, default="#6B7280")
    size = Column(String, nullable=False, default="standard")


class Medication(Base):
    __tablename__ = "medications"

    id = Column(String, primary_key=True, default=_new_id)
    drawer_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    generic_name = Column(String)
    brand_name = Column(String)
    dosage = Column(String, nullable=False)
    form = Column(String, nullable=False)
    route = Column(String, nullable=False)
    frequency = Column(String)
    classification = Column(String, nullable=False)
    indication = Column(Text)
    contraindications = Column(Text)
    side_effects = Column(Text)
    nursing_considerations = Column(Text)
    warnings = Column(Text)
    storage_instructions = Column(Text)
    manufacturer = Column(String)
    ndc_number = Column(String)
    controlled_substance = Column(Boolean, default=False)
    schedule_class = Column(String)
    color = Column(String, default="#3B82F6")
    item_type = Column(String, nullable=False, default="medication")
    # decimal strings; interpreted by services.dosage
    prep_method = Column(String)
    prep_target_amount = Column(String)
    prep_target_unit = Column(String)
    prep_max_amount = Column(String)


def init_db(bind=None):
    Base.metadata.create_all(bind=bind or engine)


def get_db():
    """FastAPI dependency: one session per request, always closed."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
