from sqlalchemy.orm import Session, joinedload

from absence_api.crud.common import apply_changes, ensure_exists, ensure_unreferenced, get_or_404, unit_of_work
from absence_api.db.models.absence import Absence
from absence_api.db.models.etudiant import Etudiant
from absence_api.db.models.justification import Justification
from absence_api.db.models.seance import Seance

_EXPAND = (joinedload(Absence.etudiant), joinedload(Absence.seance))


def list_absences(db: Session, where=None, etudiant_id=None):
    query = db.query(Absence).options(*_EXPAND)
    if etudiant_id is not None:
        query = query.filter(Absence.etudiant_id == etudiant_id)
    if where is not None:
        query = query.filter(where)
    return query.order_by(Absence.id).all()


def get_absence(db: Session, absence_id: int):
    return get_or_404(db, Absence, absence_id, "Absence non trouvée", options=_EXPAND)


def _check_references(db: Session, data: dict) -> None:
    if data.get("etudiant_id") is not None:
        ensure_exists(db, Etudiant, data["etudiant_id"], "Étudiant introuvable")
    if data.get("seance_id") is not None:
        ensure_exists(db, Seance, data["seance_id"], "Séance introuvable")


def create_absence(db: Session, absence_data):
    data = absence_data.model_dump()
    _check_references(db, data)
    data["statut"] = data["statut"].value
    # date_justification n'est posée que par la validation d'une justification
    db_absence = Absence(**data)
    with unit_of_work(db):
        db.add(db_absence)
    db.refresh(db_absence)
    return db_absence


def update_absence(db: Session, db_absence: Absence, absence_data):
    changes = absence_data.model_dump(exclude_unset=True)
    _check_references(db, changes)
    if changes.get("statut") is not None:
        changes["statut"] = changes["statut"].value
    with unit_of_work(db):
        apply_changes(db_absence, changes, nullable=("motif",))
    db.refresh(db_absence)
    return db_absence


def delete_absence(db: Session, db_absence: Absence) -> None:
    ensure_unreferenced(db, db_absence.id, [(Justification.absence_id, "des justifications")])
    with unit_of_work(db):
        db.delete(db_absence)
