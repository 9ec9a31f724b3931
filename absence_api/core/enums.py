from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Rôle porté par un compte utilisateur."""

    STUDENT = "student"
    ADMIN = "admin"
    PROFESSOR = "professor"


class StatutAbsence(str, Enum):
    ABSENT = "absent"
    PRESENT = "present"
    RETARD = "retard"


class EtatJustification(str, Enum):
    """Cycle de vie : en attente -> validé | refusé (états terminaux)."""

    EN_ATTENTE = "en attente"
    VALIDE = "validé"
    REFUSE = "refusé"
