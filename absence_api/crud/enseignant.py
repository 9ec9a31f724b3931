import logging

from sqlalchemy.orm import Session, selectinload

from absence_api.core.enums import Role
from absence_api.core.errors import DuplicateAccount, ValidationError
from absence_api.core.security import get_password_hash, normalize_email
from absence_api.crud.common import apply_changes, ensure_unreferenced, get_or_404, unit_of_work
from absence_api.crud.user import create_user, get_user_by_email, get_user_for_enseignant
from absence_api.db.models.classe import Classe
from absence_api.db.models.enseignant import Enseignant
from absence_api.db.models.seance import Seance

logger = logging.getLogger(__name__)


def list_enseignants(db: Session, where=None):
    query = db.query(Enseignant).options(selectinload(Enseignant.classes))
    if where is not None:
        query = query.filter(where)
    return query.order_by(Enseignant.id).all()


def get_enseignant(db: Session, enseignant_id: int):
    return get_or_404(
        db, Enseignant, enseignant_id, "Enseignant non trouvé", options=[selectinload(Enseignant.classes)]
    )


def get_enseignant_by_email(db: Session, email: str):
    return db.query(Enseignant).filter(Enseignant.email == normalize_email(email)).first()


def _load_classes(db: Session, classe_ids):
    ids = list(dict.fromkeys(classe_ids))
    if not ids:
        return []
    classes = db.query(Classe).filter(Classe.id.in_(ids)).order_by(Classe.id).all()
    if len(classes) != len(ids):
        raise ValidationError("Classe introuvable")
    return classes


def create_enseignant(db: Session, enseignant_data):
    """Crée l'enseignant et son compte "professor" dans une seule transaction."""
    email = normalize_email(enseignant_data.email)
    if get_user_by_email(db, email) or get_enseignant_by_email(db, email):
        raise DuplicateAccount("Un utilisateur avec cet email existe déjà")

    classes = _load_classes(db, enseignant_data.classes)
    db_enseignant = Enseignant(
        nom=enseignant_data.nom,
        prenom=enseignant_data.prenom,
        email=email,
        password_hash=get_password_hash(enseignant_data.password),
        telephone=enseignant_data.telephone,
        classes=classes,
    )
    with unit_of_work(db, on_conflict=DuplicateAccount):
        db.add(db_enseignant)
        db.flush()
        create_user(
            db,
            email=email,
            password=enseignant_data.password,
            nom=enseignant_data.nom,
            prenom=enseignant_data.prenom,
            role=Role.PROFESSOR,
            enseignant_id=db_enseignant.id,
            commit=False,
        )
    db.refresh(db_enseignant)
    logger.info("Enseignant %s créé avec son compte", db_enseignant.id)
    return db_enseignant


def update_enseignant(db: Session, db_enseignant: Enseignant, enseignant_data):
    changes = enseignant_data.model_dump(exclude_unset=True)
    password = changes.pop("password", None)
    classe_ids = changes.pop("classes", None)
    account = get_user_for_enseignant(db, db_enseignant.id)

    if changes.get("email"):
        changes["email"] = normalize_email(changes["email"])
        other = get_enseignant_by_email(db, changes["email"])
        other_user = get_user_by_email(db, changes["email"])
        if (other is not None and other.id != db_enseignant.id) or (
            other_user is not None and (account is None or other_user.id != account.id)
        ):
            raise DuplicateAccount("Un utilisateur avec cet email existe déjà")
    classes = _load_classes(db, classe_ids) if classe_ids is not None else None

    with unit_of_work(db, on_conflict=DuplicateAccount):
        apply_changes(db_enseignant, changes)
        if classes is not None:
            db_enseignant.classes = classes
        if password:
            db_enseignant.password_hash = get_password_hash(password)
        if account is not None:
            account.email = db_enseignant.email
            account.nom = db_enseignant.nom
            account.prenom = db_enseignant.prenom
            if password:
                account.hashed_password = db_enseignant.password_hash
    db.refresh(db_enseignant)
    return db_enseignant


def delete_enseignant(db: Session, db_enseignant: Enseignant) -> None:
    ensure_unreferenced(db, db_enseignant.id, [(Seance.enseignant_id, "des séances")])
    account = get_user_for_enseignant(db, db_enseignant.id)
    with unit_of_work(db):
        if account is not None:
            db.delete(account)
            db.flush()
        db.delete(db_enseignant)
