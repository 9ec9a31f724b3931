from typing import Optional

from sqlalchemy.orm import Session

from absence_api.core.enums import Role
from absence_api.core.security import get_password_hash, normalize_email
from absence_api.db.models.user import User


def get_user_by_email(db: Session, email: str):
    return db.query(User).filter(User.email == normalize_email(email)).first()


def get_user_by_id(db: Session, user_id: int):
    return db.query(User).filter(User.id == user_id).first()


def get_user_for_etudiant(db: Session, etudiant_id: int):
    return db.query(User).filter(User.etudiant_id == etudiant_id).first()


def get_user_for_enseignant(db: Session, enseignant_id: int):
    return db.query(User).filter(User.enseignant_id == enseignant_id).first()


def count_users(db: Session) -> int:
    return db.query(User).count()


def create_user(
    db: Session,
    *,
    email: str,
    password: str,
    nom: str,
    prenom: str,
    role: Role,
    etudiant_id: Optional[int] = None,
    enseignant_id: Optional[int] = None,
    commit: bool = True,
):
    """Crée un compte ; avec commit=False l'appelant garde la main sur la transaction."""
    db_user = User(
        email=normalize_email(email),
        hashed_password=get_password_hash(password),
        nom=nom,
        prenom=prenom,
        role=Role(role).value,
        etudiant_id=etudiant_id,
        enseignant_id=enseignant_id,
    )
    db.add(db_user)
    if not commit:
        db.flush()
        return db_user
    db.commit()
    db.refresh(db_user)
    return db_user
