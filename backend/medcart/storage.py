# backend/medcart/storage.py
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from medcart.db import User, Drawer, Medication
from medcart.schemas import DrawerIn, MedicationIn

log = logging.getLogger("medcart.storage")


def get_user(db: Session, user_id: str) -> Optional[User]:
    return db.get(User, user_id)


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def create_user(db: Session, username: str, password: str) -> User:
    user = User(username=username, password=password)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def get_all_drawers(db: Session) -> List[Drawer]:
    return db.query(Drawer).order_by(Drawer.position).all()


def get_drawer(db: Session, drawer_id: str) -> Optional[Drawer]:
    return db.get(Drawer, drawer_id)


def create_drawer(db: Session, drawer: DrawerIn) -> Drawer:
    created = Drawer(**drawer.model_dump())
    db.add(created)
    db.commit()
    db.refresh(created)
    log.debug("Created drawer %s (%s)", created.id, created.label)
    return created


def get_drawer_count(db: Session) -> int:
    return db.query(Drawer).count()


def get_all_medications(db: Session) -> List[Medication]:
    return db.query(Medication).all()


def get_medications_by_drawer(db: Session, drawer_id: str) -> List[Medication]:
    return db.query(Medication).filter(Medication.drawer_id == drawer_id).all()


def get_medication(db: Session, medication_id: str) -> Optional[Medication]:
    return db.get(Medication, medication_id)


def create_medication(db: Session, medication: MedicationIn) -> Medication:
    created = Medication(**medication.model_dump())
    db.add(created)
    db.commit()
    db.refresh(created)
    log.debug("Created %s %s in drawer %s", created.item_type, created.name, created.drawer_id)
    return created
