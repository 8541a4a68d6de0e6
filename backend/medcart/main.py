# backend/medcart/main.py
import logging
from contextlib import asynccontextmanager
from typing import List

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from medcart import config, storage
from medcart.db import SessionLocal, get_db, init_db
from medcart.errors import NoPreparationData, PrepDataError
from medcart.log_config import setup_logging
from medcart.schemas import DrawerOut, MedicationRecord, PreparationTarget
from medcart.seed import seed_catalog
from medcart.services import dosage

log = logging.getLogger("medcart.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(config.LOG_LEVEL)
    init_db()
    if config.SEED_ON_STARTUP:
        db = SessionLocal()
        try:
            seed_catalog(db)
        except Exception:
            db.rollback()
            log.exception("Seeding the catalog failed")
            raise
        finally:
            db.close()
    log.info("Medication cart API ready")
    yield
    log.info("Medication cart API shutting down")


app = FastAPI(title="Medication Cart Simulator API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/api/drawers", response_model=List[DrawerOut])
def list_drawers(db: Session = Depends(get_db)):
    return storage.get_all_drawers(db)


@app.get("/api/drawers/{drawer_id}", response_model=DrawerOut)
def get_drawer(drawer_id: str, db: Session = Depends(get_db)):
    drawer = storage.get_drawer(db, drawer_id)
    if not drawer:
        raise HTTPException(status_code=404, detail="Drawer not found")
    return drawer


@app.get("/api/medications", response_model=List[MedicationRecord])
def list_medications(db: Session = Depends(get_db)):
    return storage.get_all_medications(db)


@app.get("/api/medications/drawer/{drawer_id}", response_model=List[MedicationRecord])
def list_drawer_medications(drawer_id: str, db: Session = Depends(get_db)):
    return storage.get_medications_by_drawer(db, drawer_id)


@app.get("/api/medications/{medication_id}", response_model=MedicationRecord)
def get_medication(medication_id: str, db: Session = Depends(get_db)):
    medication = storage.get_medication(db, medication_id)
    if not medication:
        raise HTTPException(status_code=404, detail="Medication not found")
    return medication


@app.get("/api/medications/{medication_id}/preparation", response_model=PreparationTarget)
def get_preparation_target(medication_id: str, db: Session = Depends(get_db)):
    """
    Interpreted dose-preparation target for a medication.
    404 when the item has no preparation exercise, 422 when its prep data is unusable.
    """
    medication = storage.get_medication(db, medication_id)
    if not medication:
        raise HTTPException(status_code=404, detail="Medication not found")
    try:
        return dosage.require_target(medication)
    except NoPreparationData as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PrepDataError as e:
        log.warning("Preparation data rejected for %s: %s", medication_id, e)
        raise HTTPException(status_code=422, detail=str(e))
