from sqlalchemy import Column, Integer, String, Enum, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from absence_api.core.enums import Role
from absence_api.db.base import Base


class User(Base):
    """Compte de connexion (étudiant activé, enseignant ou administrateur)."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    nom = Column(String, nullable=False)
    prenom = Column(String, nullable=False)
    role = Column(Enum(*[r.value for r in Role], name="user_role"), nullable=False)

    # fiche liée selon le rôle (student -> etudiant, professor -> enseignant)
    etudiant_id = Column(Integer, ForeignKey("etudiants.id"), unique=True, nullable=True)
    enseignant_id = Column(Integer, ForeignKey("enseignants.id"), unique=True, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    etudiant = relationship("Etudiant")
    enseignant = relationship("Enseignant")
