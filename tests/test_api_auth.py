from absence_api.core.config import settings
from absence_api.crud import user as crud_user


def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "message" in resp.json()


def test_login_success(client, admin):
    resp = client.post("/api/auth/login", json={"email": "admin@ecole.fr", "password": "admin123"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Connexion réussie."
    assert body["token"]
    assert body["user"]["role"] == "admin"


def test_login_wrong_password_gives_no_token(client, admin):
    resp = client.post("/api/auth/login", json={"email": "admin@ecole.fr", "password": "faux"})
    assert resp.status_code == 401
    assert "token" not in resp.json()
    assert resp.json()["message"]


def test_login_missing_fields(client):
    resp = client.post("/api/auth/login", json={"email": "admin@ecole.fr"})
    assert resp.status_code == 400


def test_admin_creates_student_then_student_activates(client, admin, db, auth_headers):
    classe = client.post(
        "/api/classes/",
        json={"nom_classe": "C1", "niveau": "L1", "departement": "Info", "filiere": "Info"},
        headers=auth_headers(admin),
    ).json()

    resp = client.post(
        "/api/etudiants/",
        json={"nom": "Ali", "prenom": "Ben", "email": "ali@x.com", "classe": classe["id"]},
        headers=auth_headers(admin),
    )
    assert resp.status_code == 201
    etudiant = resp.json()
    assert etudiant["is_activated"] is False
    assert etudiant["classe_id"] == classe["id"]

    resp = client.post("/api/auth/activate-student", json={"email": "ali@x.com", "password": "pw123456"})
    assert resp.status_code == 201
    body = resp.json()
    assert body["token"]
    assert body["user"]["etudiant"] == etudiant["id"]

    resp = client.get(f"/api/etudiants/{etudiant['id']}", headers=auth_headers(admin))
    assert resp.json()["is_activated"] is True

    again = client.post("/api/auth/activate-student", json={"email": "ali@x.com", "password": "pw123456"})
    assert again.status_code == 400


def test_activation_unknown_student(client):
    resp = client.post("/api/auth/activate-student", json={"email": "nobody@x.com", "password": "pw123456"})
    assert resp.status_code == 404


def test_register_admin(client):
    payload = {"email": "New@Ecole.fr", "password": "admin123", "nom": "N", "prenom": "A"}
    resp = client.post("/api/auth/register", json=payload)
    assert resp.status_code == 201
    assert resp.json()["user"]["email"] == "new@ecole.fr"

    dup = client.post("/api/auth/register", json=payload)
    assert dup.status_code == 400
    assert "existe déjà" in dup.json()["message"]


def test_register_refuses_student_role(client, db):
    resp = client.post(
        "/api/auth/register",
        json={"email": "s@x.com", "password": "pw123456", "nom": "S", "prenom": "T", "role": "student"},
    )
    assert resp.status_code == 400
    assert crud_user.count_users(db) == 0


def test_register_disabled(client, monkeypatch):
    monkeypatch.setattr(settings, "ALLOW_ADMIN_REGISTRATION", False)
    resp = client.post(
        "/api/auth/register",
        json={"email": "x@x.com", "password": "pw123456", "nom": "X", "prenom": "Y"},
    )
    assert resp.status_code == 403


def test_protected_route_without_token(client):
    resp = client.get("/api/classes/")
    assert resp.status_code == 401
    assert resp.json()["message"]


def test_protected_route_with_garbage_token(client):
    resp = client.get("/api/classes/", headers={"Authorization": "Bearer pas.un.jwt"})
    assert resp.status_code == 401


def test_me_for_student(client, school, auth_headers):
    resp = client.get("/api/auth/me", headers=auth_headers(school.e1_user))
    assert resp.status_code == 200
    body = resp.json()
    assert body["user"]["role"] == "student"
    assert body["etudiant"]["id"] == school.e1.id
    assert body["etudiant"]["classe"]["id"] == school.c1.id
    assert body["enseignant"] is None


def test_me_for_professor(client, school, auth_headers):
    body = client.get("/api/auth/me", headers=auth_headers(school.p1_user)).json()
    assert body["enseignant"]["id"] == school.p1.id
    assert body["enseignant"]["classe_ids"] == [school.c1.id]


def test_register_rejects_malformed_email(client, db):
    resp = client.post(
        "/api/auth/register",
        json={"email": "pas-un-email", "password": "admin123", "nom": "N", "prenom": "A"},
    )
    assert resp.status_code == 400
    assert "email valide" in resp.json()["message"]
    assert crud_user.count_users(db) == 0


def test_login_rejects_malformed_email(client, admin):
    resp = client.post("/api/auth/login", json={"email": "admin-ecole.fr", "password": "admin123"})
    assert resp.status_code == 400
    assert "token" not in resp.json()


def test_activation_rejects_malformed_email(client):
    resp = client.post("/api/auth/activate-student", json={"email": "ali@", "password": "pw123456"})
    assert resp.status_code == 400
