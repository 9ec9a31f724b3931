import logging

from sqlalchemy.orm import Session, joinedload

from absence_api.core.errors import Conflict, DuplicateAccount
from absence_api.core.security import normalize_email
from absence_api.crud.common import apply_changes, ensure_exists, ensure_unreferenced, get_or_404, unit_of_work
from absence_api.crud.user import get_user_by_email, get_user_for_etudiant
from absence_api.db.models.absence import Absence
from absence_api.db.models.classe import Classe
from absence_api.db.models.etudiant import Etudiant

logger = logging.getLogger(__name__)


def list_etudiants(db: Session, where=None):
    query = db.query(Etudiant).options(joinedload(Etudiant.classe))
    if where is not None:
        query = query.filter(where)
    # les plus récents d'abord
    return query.order_by(Etudiant.id.desc()).all()


def get_etudiant(db: Session, etudiant_id: int):
    return get_or_404(
        db, Etudiant, etudiant_id, "Étudiant non trouvé", options=[joinedload(Etudiant.classe)]
    )


def get_etudiant_by_email(db: Session, email: str):
    return db.query(Etudiant).filter(Etudiant.email == normalize_email(email)).first()


def _check_email_free(db: Session, email: str, etudiant_id=None) -> None:
    existing = get_etudiant_by_email(db, email)
    if existing is not None and existing.id != etudiant_id:
        raise Conflict("Un étudiant avec cet email existe déjà.")


def create_etudiant(db: Session, etudiant_data):
    data = etudiant_data.model_dump()
    data["email"] = normalize_email(data["email"])
    _check_email_free(db, data["email"])
    if data.get("classe_id") is not None:
        ensure_exists(db, Classe, data["classe_id"], "Classe introuvable")

    # is_activated reste à False jusqu'à l'activation du compte
    db_etudiant = Etudiant(**data, is_activated=False)
    with unit_of_work(db):
        db.add(db_etudiant)
    db.refresh(db_etudiant)
    return db_etudiant


def update_etudiant(db: Session, db_etudiant: Etudiant, etudiant_data):
    changes = etudiant_data.model_dump(exclude_unset=True)
    if changes.get("email"):
        changes["email"] = normalize_email(changes["email"])
        _check_email_free(db, changes["email"], db_etudiant.id)
    if changes.get("classe_id") is not None:
        ensure_exists(db, Classe, changes["classe_id"], "Classe introuvable")

    account = get_user_for_etudiant(db, db_etudiant.id)
    with unit_of_work(db):
        apply_changes(db_etudiant, changes, nullable=("classe_id",))
        if account is not None:
            # le compte suit l'email et le nom de l'étudiant
            if account.email != db_etudiant.email:
                other = get_user_by_email(db, db_etudiant.email)
                if other is not None and other.id != account.id:
                    raise DuplicateAccount()
                account.email = db_etudiant.email
            account.nom = db_etudiant.nom
            account.prenom = db_etudiant.prenom
    db.refresh(db_etudiant)
    return db_etudiant


def delete_etudiant(db: Session, db_etudiant: Etudiant) -> None:
    ensure_unreferenced(db, db_etudiant.id, [(Absence.etudiant_id, "des absences")])
    etudiant_id = db_etudiant.id
    account = get_user_for_etudiant(db, etudiant_id)
    with unit_of_work(db):
        if account is not None:
            db.delete(account)
            db.flush()
        db.delete(db_etudiant)
    logger.info("Étudiant %s supprimé (compte supprimé: %s)", etudiant_id, account is not None)
