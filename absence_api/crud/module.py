from sqlalchemy.orm import Session

from absence_api.crud.common import apply_changes, ensure_unreferenced, get_or_404, unit_of_work
from absence_api.db.models.module import Module
from absence_api.db.models.seance import Seance


def list_modules(db: Session, where=None):
    query = db.query(Module)
    if where is not None:
        query = query.filter(where)
    return query.order_by(Module.id).all()


def get_module(db: Session, module_id: int):
    return get_or_404(db, Module, module_id, "Module non trouvé")


def create_module(db: Session, module_data):
    db_module = Module(**module_data.model_dump())
    with unit_of_work(db):
        db.add(db_module)
    db.refresh(db_module)
    return db_module


def update_module(db: Session, db_module: Module, module_data):
    with unit_of_work(db):
        apply_changes(db_module, module_data.model_dump(exclude_unset=True))
    db.refresh(db_module)
    return db_module


def delete_module(db: Session, db_module: Module) -> None:
    ensure_unreferenced(db, db_module.id, [(Seance.module_id, "des séances")])
    with unit_of_work(db):
        db.delete(db_module)
