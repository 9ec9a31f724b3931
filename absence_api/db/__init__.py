# absence_api/db/__init__.py
# Importer absence_api.db suffit à enregistrer tous les modèles sur Base.metadata

from absence_api.db.models import (
    Base,
    Classe,
    Module,
    Enseignant,
    Etudiant,
    Seance,
    Absence,
    Justification,
    User,
)

__all__ = [
    "Base",
    "Classe",
    "Module",
    "Enseignant",
    "Etudiant",
    "Seance",
    "Absence",
    "Justification",
    "User",
]
