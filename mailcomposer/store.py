"""
Collaborateur de persistance — load/save/create/delete/list des templates.

Le cœur ne dépend que du protocole `TemplateStore` ; `SqlTemplateStore` en est
l'implémentation SQLite. Les erreurs SQLAlchemy sont journalisées et converties
en `OperationResult.error`, jamais propagées.
"""
import logging
from typing import Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from .core.schemas import OperationResult
from .database import (
    SessionLocal,
    db_create_template, db_get_template, db_list_templates,
    db_update_template, db_delete_template,
)
from .models import Template, TemplateDB

log = logging.getLogger(__name__)

NAME_REQUIRED = "Le nom est obligatoire"
NOT_FOUND     = "Template introuvable"


class TemplateStore(Protocol):
    def get(self, template_id: str) -> OperationResult: ...
    def update(self, template_id: str, name: str, content: str) -> OperationResult: ...
    def create(self, user_id: str, name: str, html: str) -> OperationResult: ...
    def delete(self, template_id: str) -> OperationResult: ...
    def list(self, user_id: Optional[str] = None) -> OperationResult: ...


class SqlTemplateStore:
    """Stockage SQLite des templates (une session par opération)."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self.session_factory = session_factory or SessionLocal

    def get(self, template_id: str) -> OperationResult:
        try:
            with self.session_factory() as db:
                row = db_get_template(db, template_id)
                if row is None:
                    return OperationResult.failure(NOT_FOUND)
                return OperationResult.success(Template.from_db(row))
        except SQLAlchemyError as e:
            log.warning("get template %s : %s", template_id, e)
            return OperationResult.failure(str(e))

    def update(self, template_id: str, name: str, content: str) -> OperationResult:
        name = (name or "").strip()
        if not name:
            return OperationResult.failure(NAME_REQUIRED)
        try:
            with self.session_factory() as db:
                row = db_get_template(db, template_id)
                if row is None:
                    return OperationResult.failure(NOT_FOUND)
                row = db_update_template(db, row, name=name, content=content)
                log.info("Template %s enregistré (%d car.)", template_id, len(content or ""))
                return OperationResult.success(Template.from_db(row))
        except SQLAlchemyError as e:
            log.warning("update template %s : %s", template_id, e)
            return OperationResult.failure(str(e))

    def create(self, user_id: str, name: str, html: str) -> OperationResult:
        """Nouveau template : le HTML brut est stocké tel quel dans `content`."""
        name = (name or "").strip()
        if not name:
            return OperationResult.failure(NAME_REQUIRED)
        try:
            with self.session_factory() as db:
                row = db_create_template(db, TemplateDB(user_id=user_id, name=name, content=html))
                log.info("Template %s créé pour %s", row.id, user_id)
                return OperationResult.success(Template.from_db(row))
        except SQLAlchemyError as e:
            log.warning("create template (%s) : %s", user_id, e)
            return OperationResult.failure(str(e))

    def delete(self, template_id: str) -> OperationResult:
        try:
            with self.session_factory() as db:
                row = db_get_template(db, template_id)
                if row is None:
                    return OperationResult.failure(NOT_FOUND)
                db_delete_template(db, row)
                log.info("Template %s supprimé", template_id)
                return OperationResult.success()
        except SQLAlchemyError as e:
            log.warning("delete template %s : %s", template_id, e)
            return OperationResult.failure(str(e))

    def list(self, user_id: Optional[str] = None) -> OperationResult:
        try:
            with self.session_factory() as db:
                rows = db_list_templates(db, user_id)
                return OperationResult(ok=True, templates=[Template.from_db(r) for r in rows])
        except SQLAlchemyError as e:
            log.warning("list templates (%s) : %s", user_id, e)
            return OperationResult.failure(str(e))
