# absence_api/core/auth_service.py
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from absence_api.core.enums import Role
from absence_api.core.errors import (
    AlreadyActivated,
    DuplicateAccount,
    InvalidCredentials,
    InvalidToken,
    RoleNotAllowed,
    StudentNotFound,
    ValidationError,
)
from absence_api.core.security import (
    check_email_format,
    create_access_token,
    decode_access_token,
    normalize_email,
    verify_password,
)
from absence_api.crud import user as crud_user
from absence_api.db.models.etudiant import Etudiant

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


@dataclass(frozen=True)
class Caller:
    """Identité authentifiée attachée à la requête."""

    id: int
    email: str
    role: Role
    etudiant_id: Optional[int] = None
    enseignant_id: Optional[int] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def public_identity(user) -> dict:
    # jamais le hash du mot de passe
    return {
        "id": user.id,
        "email": user.email,
        "nom": user.nom,
        "prenom": user.prenom,
        "role": user.role,
        "etudiant": user.etudiant_id,
        "enseignant": user.enseignant_id,
    }


def issue_token(user) -> str:
    return create_access_token(data={"sub": str(user.id), "role": user.role})


def _require_credentials(email: Optional[str], password: Optional[str]) -> str:
    email = normalize_email(email)
    if not email or not password:
        raise ValidationError("Email et mot de passe requis.")
    return check_email_format(email)


def _require_password_length(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Le mot de passe doit contenir au moins {MIN_PASSWORD_LENGTH} caractères."
        )


def login(db: Session, email: Optional[str], password: Optional[str]) -> Tuple[str, dict]:
    email = _require_credentials(email, password)
    user = crud_user.get_user_by_email(db, email)
    if not user or not verify_password(password, user.hashed_password):
        logger.info("Échec de connexion pour %s", email)
        raise InvalidCredentials()

    logger.info("Connexion réussie: user=%s role=%s", user.id, user.role)
    return issue_token(user), public_identity(user)


def activate_student_account(db: Session, email: Optional[str], password: Optional[str]) -> Tuple[str, dict]:
    """Crée le compte d'un étudiant pré-enregistré par l'administration.

    Le compte et le drapeau ``is_activated`` sont écrits dans la même
    transaction : soit les deux, soit aucun.
    """
    email = _require_credentials(email, password)
    _require_password_length(password)

    etudiant = db.query(Etudiant).filter(Etudiant.email == email).first()
    existing = crud_user.get_user_by_email(db, email)
    if existing:
        if etudiant is not None and etudiant.is_activated and existing.etudiant_id == etudiant.id:
            raise AlreadyActivated()
        raise DuplicateAccount("Un compte utilisateur existe déjà pour cet email.")
    if etudiant is None:
        raise StudentNotFound()
    if etudiant.is_activated:
        raise AlreadyActivated()

    try:
        user = crud_user.create_user(
            db,
            email=email,
            password=password,
            nom=etudiant.nom,
            prenom=etudiant.prenom,
            role=Role.STUDENT,
            etudiant_id=etudiant.id,
            commit=False,
        )
        etudiant.is_activated = True
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateAccount("Un compte utilisateur existe déjà pour cet email.")
    except Exception:
        db.rollback()
        logger.exception("Erreur lors de l'activation du compte %s", email)
        raise
    db.refresh(user)

    logger.info("Compte étudiant activé: etudiant=%s user=%s", etudiant.id, user.id)
    return issue_token(user), public_identity(user)


def register_admin(
    db: Session,
    *,
    email: Optional[str],
    password: Optional[str],
    nom: Optional[str],
    prenom: Optional[str],
    role: Optional[str] = None,
) -> Tuple[str, dict]:
    if role and role != Role.ADMIN.value:
        raise RoleNotAllowed()
    email = _require_credentials(email, password)
    _require_password_length(password)
    if not (nom or "").strip() or not (prenom or "").strip():
        raise ValidationError("Le nom et le prénom sont requis.")

    if crud_user.get_user_by_email(db, email):
        raise DuplicateAccount("Un utilisateur avec cet email existe déjà.")
    try:
        user = crud_user.create_user(
            db, email=email, password=password, nom=nom.strip(), prenom=prenom.strip(), role=Role.ADMIN
        )
    except IntegrityError:
        db.rollback()
        raise DuplicateAccount("Un utilisateur avec cet email existe déjà.")

    logger.info("Administrateur créé: user=%s", user.id)
    return issue_token(user), public_identity(user)


def verify_token(db: Session, token: str) -> Caller:
    payload = decode_access_token(token)
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise InvalidToken()

    # rôle et liens relus en base : le payload ne fait pas foi
    user = crud_user.get_user_by_id(db, user_id)
    if not user:
        raise InvalidToken("Token invalide.")
    return Caller(
        id=user.id,
        email=user.email,
        role=Role(user.role),
        etudiant_id=user.etudiant_id,
        enseignant_id=user.enseignant_id,
    )


def ensure_admin_exists(db: Session, email: Optional[str], password: Optional[str]) -> bool:
    """Crée l'administrateur initial si la base ne contient aucun compte."""
    if not email or not password:
        logger.info("ADMIN_EMAIL/ADMIN_PASSWORD absents : pas d'administrateur initial")
        return False
    if crud_user.count_users(db) > 0:
        return False

    crud_user.create_user(db, email=email, password=password, nom="admin", prenom="system", role=Role.ADMIN)
    logger.info("🚀 Administrateur initial créé (%s)", normalize_email(email))
    return True
