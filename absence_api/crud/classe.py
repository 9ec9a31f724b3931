from sqlalchemy.orm import Session

from absence_api.crud.common import apply_changes, ensure_unreferenced, get_or_404, unit_of_work
from absence_api.db.models.classe import Classe
from absence_api.db.models.enseignant import enseignant_classes
from absence_api.db.models.etudiant import Etudiant
from absence_api.db.models.seance import Seance


def list_classes(db: Session, where=None):
    query = db.query(Classe)
    if where is not None:
        query = query.filter(where)
    return query.order_by(Classe.id).all()


def get_classe(db: Session, classe_id: int):
    return get_or_404(db, Classe, classe_id, "Classe non trouvée")


def create_classe(db: Session, classe_data):
    db_classe = Classe(**classe_data.model_dump())
    with unit_of_work(db):
        db.add(db_classe)
    db.refresh(db_classe)
    return db_classe


def update_classe(db: Session, db_classe: Classe, classe_data):
    with unit_of_work(db):
        apply_changes(db_classe, classe_data.model_dump(exclude_unset=True))
    db.refresh(db_classe)
    return db_classe


def delete_classe(db: Session, db_classe: Classe) -> None:
    ensure_unreferenced(db, db_classe.id, [
        (Etudiant.classe_id, "des étudiants"),
        (Seance.classe_id, "des séances"),
        (enseignant_classes.c.classe_id, "des enseignants"),
    ])
    with unit_of_work(db):
        db.delete(db_classe)
