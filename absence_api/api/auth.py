from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from absence_api.api.deps import get_current_user, get_db
from absence_api.core import auth_service
from absence_api.core.auth_service import Caller
from absence_api.core.config import settings
from absence_api.core.errors import Forbidden
from absence_api.crud import enseignant as crud_enseignant
from absence_api.crud import etudiant as crud_etudiant
from absence_api.crud import user as crud_user
from absence_api.schemas.user import ActivationRequest, AuthResponse, LoginRequest, Profile, RegisterRequest

router = APIRouter()


@router.post("/login", response_model=AuthResponse)
def login(form: LoginRequest, db: Session = Depends(get_db)):
    token, user = auth_service.login(db, form.email, form.password)
    return {"message": "Connexion réussie.", "token": token, "user": user}


@router.post("/activate-student", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def activate_student(form: ActivationRequest, db: Session = Depends(get_db)):
    token, user = auth_service.activate_student_account(db, form.email, form.password)
    return {"message": "Compte étudiant activé avec succès.", "token": token, "user": user}


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user_in: RegisterRequest, db: Session = Depends(get_db)):
    if not settings.ALLOW_ADMIN_REGISTRATION:
        raise Forbidden("La création de comptes administrateur est désactivée.")
    token, user = auth_service.register_admin(
        db,
        email=user_in.email,
        password=user_in.password,
        nom=user_in.nom,
        prenom=user_in.prenom,
        role=user_in.role,
    )
    return {"message": "Administrateur créé avec succès.", "token": token, "user": user}


@router.get("/me", response_model=Profile)
def read_profile(db: Session = Depends(get_db), current_user: Caller = Depends(get_current_user)):
    user = crud_user.get_user_by_id(db, current_user.id)
    profile = {"user": auth_service.public_identity(user)}
    if current_user.etudiant_id is not None:
        profile["etudiant"] = crud_etudiant.get_etudiant(db, current_user.etudiant_id)
    if current_user.enseignant_id is not None:
        profile["enseignant"] = crud_enseignant.get_enseignant(db, current_user.enseignant_id)
    return profile
