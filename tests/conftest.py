from datetime import date
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from absence_api.api.deps import get_db
from absence_api.core import auth_service
from absence_api.core.enums import Role
from absence_api.crud import absence as crud_absence
from absence_api.crud import classe as crud_classe
from absence_api.crud import enseignant as crud_enseignant
from absence_api.crud import etudiant as crud_etudiant
from absence_api.crud import justification as crud_justification
from absence_api.crud import module as crud_module
from absence_api.crud import seance as crud_seance
from absence_api.crud import user as crud_user
from absence_api.db import Base
from absence_api.main import app
from absence_api.schemas.absence import AbsenceCreate
from absence_api.schemas.classe import ClasseCreate
from absence_api.schemas.enseignant import EnseignantCreate
from absence_api.schemas.etudiant import EtudiantCreate
from absence_api.schemas.justification import JustificationCreate
from absence_api.schemas.module import ModuleCreate
from absence_api.schemas.seance import SeanceCreate


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def _fk_on(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {auth_service.issue_token(user)}"}


def _caller_for(user) -> auth_service.Caller:
    return auth_service.Caller(
        id=user.id,
        email=user.email,
        role=Role(user.role),
        etudiant_id=user.etudiant_id,
        enseignant_id=user.enseignant_id,
    )


def _make_enseignant(db, email, classes=()):
    enseignant = crud_enseignant.create_enseignant(
        db,
        EnseignantCreate(
            nom="Martin",
            prenom="Paul",
            email=email,
            password="prof1234",
            telephone="0600000000",
            classes=list(classes),
        ),
    )
    return enseignant, crud_user.get_user_for_enseignant(db, enseignant.id)


def _make_etudiant(db, email, classe_id, activate=True):
    etudiant = crud_etudiant.create_etudiant(
        db, EtudiantCreate(nom="Ben", prenom="Ali", email=email, classe_id=classe_id)
    )
    if not activate:
        return etudiant, None
    auth_service.activate_student_account(db, email, "pw123456")
    return etudiant, crud_user.get_user_for_etudiant(db, etudiant.id)


@pytest.fixture
def auth_headers():
    """En-têtes Authorization pour un compte donné."""
    return _auth_headers


@pytest.fixture
def caller_for():
    return _caller_for


@pytest.fixture
def make_etudiant():
    return _make_etudiant


@pytest.fixture
def admin(db):
    return crud_user.create_user(
        db, email="admin@ecole.fr", password="admin123", nom="Admin", prenom="Système", role=Role.ADMIN
    )


@pytest.fixture
def school(db, admin):
    """Deux classes, deux professeurs, un étudiant par classe, une absence chacun."""
    c1 = crud_classe.create_classe(
        db, ClasseCreate(nom_classe="L1 Info A", niveau="L1", departement="Informatique", filiere="Info")
    )
    c2 = crud_classe.create_classe(
        db, ClasseCreate(nom_classe="L2 Math", niveau="L2", departement="Mathématiques", filiere="Math")
    )
    module = crud_module.create_module(db, ModuleCreate(nom_module="Algèbre", coefficient=2))

    p1, p1_user = _make_enseignant(db, "p1@ecole.fr", classes=[c1.id])
    p2, p2_user = _make_enseignant(db, "p2@ecole.fr", classes=[c2.id])

    e1, e1_user = _make_etudiant(db, "e1@ecole.fr", c1.id)
    e2, e2_user = _make_etudiant(db, "e2@ecole.fr", c2.id)

    s1 = crud_seance.create_seance(
        db,
        SeanceCreate(
            date_seance=date(2026, 10, 5), heure_debut="08:30", heure_fin="10:00",
            enseignant_id=p1.id, module_id=module.id, classe_id=c1.id,
        ),
    )
    s2 = crud_seance.create_seance(
        db,
        SeanceCreate(
            date_seance=date(2026, 10, 6), heure_debut="10:15", heure_fin="11:45",
            enseignant_id=p2.id, module_id=module.id, classe_id=c2.id,
        ),
    )
    a1 = crud_absence.create_absence(db, AbsenceCreate(etudiant_id=e1.id, seance_id=s1.id))
    a2 = crud_absence.create_absence(db, AbsenceCreate(etudiant_id=e2.id, seance_id=s2.id))
    j1 = crud_justification.create_justification(
        db, JustificationCreate(absence_id=a1.id, fichier="certificat_e1.pdf")
    )
    j2 = crud_justification.create_justification(
        db, JustificationCreate(absence_id=a2.id, fichier="certificat_e2.pdf")
    )
    return SimpleNamespace(
        admin=admin, c1=c1, c2=c2, module=module,
        p1=p1, p1_user=p1_user, p2=p2, p2_user=p2_user,
        e1=e1, e1_user=e1_user, e2=e2, e2_user=e2_user,
        s1=s1, s2=s2, a1=a1, a2=a2, j1=j1, j2=j2,
    )
