import pytest

from absence_api.core import auth_service
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
from absence_api.crud import user as crud_user
from absence_api.crud.classe import create_classe
from absence_api.schemas.classe import ClasseCreate


@pytest.fixture
def classe(db):
    return create_classe(db, ClasseCreate(nom_classe="C1", niveau="L1", departement="Info", filiere="Info"))


def test_login_returns_token_and_public_identity(db, admin):
    token, user = auth_service.login(db, "  ADMIN@ecole.fr ", "admin123")
    assert token
    assert user["email"] == "admin@ecole.fr"
    assert user["role"] == Role.ADMIN.value
    assert "hashed_password" not in user


def test_login_wrong_password(db, admin):
    with pytest.raises(InvalidCredentials):
        auth_service.login(db, "admin@ecole.fr", "mauvais")


def test_login_unknown_email(db):
    with pytest.raises(InvalidCredentials):
        auth_service.login(db, "personne@ecole.fr", "admin123")


@pytest.mark.parametrize("email,password", [(None, "x"), ("a@b.c", None), ("   ", "x")])
def test_login_requires_both_fields(db, email, password):
    with pytest.raises(ValidationError):
        auth_service.login(db, email, password)


def test_activation_succeeds_exactly_once(db, classe, make_etudiant):
    etudiant, _ = make_etudiant(db, "ali@x.com", classe.id, activate=False)

    token, user = auth_service.activate_student_account(db, "Ali@X.com", "pw123456")
    db.refresh(etudiant)
    assert token
    assert user["role"] == Role.STUDENT.value
    assert user["etudiant"] == etudiant.id
    assert user["nom"] == etudiant.nom
    assert etudiant.is_activated is True

    with pytest.raises(AlreadyActivated):
        auth_service.activate_student_account(db, "ali@x.com", "pw123456")
    assert crud_user.count_users(db) == 1


def test_activation_unknown_student(db):
    with pytest.raises(StudentNotFound):
        auth_service.activate_student_account(db, "inconnu@x.com", "pw123456")


def test_activation_password_too_short(db, classe, make_etudiant):
    make_etudiant(db, "ali@x.com", classe.id, activate=False)
    with pytest.raises(ValidationError):
        auth_service.activate_student_account(db, "ali@x.com", "123")


def test_activation_blocked_by_unrelated_account(db, classe, make_etudiant):
    etudiant, _ = make_etudiant(db, "ali@x.com", classe.id, activate=False)
    crud_user.create_user(db, email="ali@x.com", password="admin123", nom="A", prenom="B", role=Role.ADMIN)

    with pytest.raises(DuplicateAccount):
        auth_service.activate_student_account(db, "ali@x.com", "pw123456")
    db.refresh(etudiant)
    assert etudiant.is_activated is False


def test_register_admin_rejects_other_roles(db):
    with pytest.raises(RoleNotAllowed):
        auth_service.register_admin(
            db, email="s@x.com", password="pw123456", nom="S", prenom="T", role="student"
        )
    assert crud_user.count_users(db) == 0


def test_register_admin_duplicate(db, admin):
    with pytest.raises(DuplicateAccount) as exc:
        auth_service.register_admin(
            db, email="Admin@Ecole.fr", password="pw123456", nom="A", prenom="B", role="admin"
        )
    assert "existe déjà" in exc.value.message
    assert crud_user.count_users(db) == 1


def test_verify_token_reads_role_from_store(db, admin):
    caller = auth_service.verify_token(db, auth_service.issue_token(admin))
    assert caller.id == admin.id
    assert caller.is_admin


def test_verify_token_for_deleted_user(db, admin):
    token = auth_service.issue_token(admin)
    db.delete(admin)
    db.commit()
    with pytest.raises(InvalidToken):
        auth_service.verify_token(db, token)


def test_ensure_admin_exists_is_idempotent(db):
    assert auth_service.ensure_admin_exists(db, "boot@ecole.fr", "boot1234") is True
    assert auth_service.ensure_admin_exists(db, "boot@ecole.fr", "boot1234") is False
    assert crud_user.count_users(db) == 1


def test_ensure_admin_exists_without_settings(db):
    assert auth_service.ensure_admin_exists(db, None, None) is False
    assert crud_user.count_users(db) == 0


def test_register_admin_malformed_email(db):
    with pytest.raises(ValidationError):
        auth_service.register_admin(db, email="pas-un-email", password="pw123456", nom="N", prenom="A")
    assert crud_user.count_users(db) == 0


def test_activation_malformed_email(db):
    with pytest.raises(ValidationError):
        auth_service.activate_student_account(db, "ali@", "pw123456")
