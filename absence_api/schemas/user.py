from pydantic import BaseModel
from typing import Optional

from absence_api.schemas.enseignant import EnseignantRead
from absence_api.schemas.etudiant import EtudiantRead


# Champs optionnels : l'absence d'email/mot de passe est une erreur 400 métier
class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ActivationRequest(LoginRequest):
    pass


class RegisterRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    nom: Optional[str] = None
    prenom: Optional[str] = None
    role: Optional[str] = None


class UserOut(BaseModel):
    id: int
    email: str
    nom: str
    prenom: str
    role: str
    etudiant: Optional[int] = None
    enseignant: Optional[int] = None


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserOut


class Profile(BaseModel):
    user: UserOut
    etudiant: Optional[EtudiantRead] = None
    enseignant: Optional[EnseignantRead] = None


class MessageOut(BaseModel):
    message: str
