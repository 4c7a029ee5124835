"""SQLite — init + session + CRUD helpers"""
import os
from pathlib import Path
from typing import List, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .models import Base, TemplateDB

DB_PATH = os.getenv("DB_PATH", str(Path("data") / "mailcomposer.db"))


def make_engine(db_path: str) -> Engine:
    return create_engine(f"sqlite:///{db_path}", connect_args={"check_same_thread": False})


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


ENGINE       = make_engine(DB_PATH)
SessionLocal = make_session_factory(ENGINE)


def init_db(engine: Optional[Engine] = None):
    engine = engine or ENGINE
    db_file = engine.url.database
    if db_file and db_file != ":memory:":
        Path(db_file).parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=engine)


# ── Template ──
def db_create_template(db: Session, obj: TemplateDB) -> TemplateDB:
    db.add(obj); db.commit(); db.refresh(obj); return obj

def db_get_template(db: Session, tid: str) -> Optional[TemplateDB]:
    return db.query(TemplateDB).filter_by(id=tid).first()

def db_list_templates(db: Session, user_id: Optional[str] = None) -> List[TemplateDB]:
    q = db.query(TemplateDB)
    if user_id: q = q.filter_by(user_id=user_id)
    return q.order_by(TemplateDB.created_at.desc()).all()

def db_update_template(db: Session, obj: TemplateDB, **kwargs) -> TemplateDB:
    for k, v in kwargs.items():
        setattr(obj, k, v)
    db.commit(); db.refresh(obj); return obj

def db_delete_template(db: Session, obj: TemplateDB) -> None:
    db.delete(obj); db.commit()
