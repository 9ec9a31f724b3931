from sqlalchemy.orm import Session, joinedload

from absence_api.crud.common import apply_changes, ensure_exists, ensure_unreferenced, get_or_404, unit_of_work
from absence_api.db.models.absence import Absence
from absence_api.db.models.classe import Classe
from absence_api.db.models.enseignant import Enseignant
from absence_api.db.models.module import Module
from absence_api.db.models.seance import Seance

_EXPAND = (
    joinedload(Seance.enseignant).selectinload(Enseignant.classes),
    joinedload(Seance.module),
    joinedload(Seance.classe),
)


def list_seances(db: Session, where=None):
    query = db.query(Seance).options(*_EXPAND)
    if where is not None:
        query = query.filter(where)
    return query.order_by(Seance.id).all()


def get_seance(db: Session, seance_id: int):
    return get_or_404(db, Seance, seance_id, "Séance non trouvée", options=_EXPAND)


def _check_references(db: Session, data: dict) -> None:
    if data.get("enseignant_id") is not None:
        ensure_exists(db, Enseignant, data["enseignant_id"], "Enseignant introuvable")
    if data.get("module_id") is not None:
        ensure_exists(db, Module, data["module_id"], "Module introuvable")
    if data.get("classe_id") is not None:
        ensure_exists(db, Classe, data["classe_id"], "Classe introuvable")


def create_seance(db: Session, seance_data):
    data = seance_data.model_dump()
    _check_references(db, data)
    db_seance = Seance(**data)
    with unit_of_work(db):
        db.add(db_seance)
    db.refresh(db_seance)
    return db_seance


def update_seance(db: Session, db_seance: Seance, seance_data):
    changes = seance_data.model_dump(exclude_unset=True)
    _check_references(db, changes)
    with unit_of_work(db):
        apply_changes(db_seance, changes)
    db.refresh(db_seance)
    return db_seance


def delete_seance(db: Session, db_seance: Seance) -> None:
    ensure_unreferenced(db, db_seance.id, [(Absence.seance_id, "des absences")])
    with unit_of_work(db):
        db.delete(db_seance)
