from absence_api.db.base import Base
from absence_api.db.models.classe import Classe
from absence_api.db.models.module import Module
from absence_api.db.models.enseignant import Enseignant, enseignant_classes
from absence_api.db.models.etudiant import Etudiant
from absence_api.db.models.seance import Seance
from absence_api.db.models.absence import Absence
from absence_api.db.models.justification import Justification
from absence_api.db.models.user import User

__all__ = [
    "Base",
    "Classe",
    "Module",
    "Enseignant",
    "enseignant_classes",
    "Etudiant",
    "Seance",
    "Absence",
    "Justification",
    "User",
]
