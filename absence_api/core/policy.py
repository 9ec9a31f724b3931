# absence_api/core/policy.py
"""Moteur de politique d'accès.

La base n'a pas de sécurité au niveau des lignes : chaque route passe par
``AccessPolicy`` avant d'atteindre le store. Un même prédicat SQL sert à
filtrer les listes et à vérifier qu'un enregistrement précis est dans le
périmètre de l'appelant (lecture, modification, suppression).
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from sqlalchemy import false, select
from sqlalchemy.orm import Session

from absence_api.core.auth_service import Caller
from absence_api.core.enums import Role
from absence_api.core.errors import Forbidden
from absence_api.crud.common import ensure_exists
from absence_api.db.models import Absence, Classe, Enseignant, Etudiant, Justification, Module, Seance

logger = logging.getLogger(__name__)


class Resource(str, Enum):
    CLASSE = "classe"
    MODULE = "module"
    ENSEIGNANT = "enseignant"
    ETUDIANT = "etudiant"
    SEANCE = "seance"
    ABSENCE = "absence"
    JUSTIFICATION = "justification"


class Operation(str, Enum):
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    VALIDATE = "validate"


MODELS = {
    Resource.CLASSE: Classe,
    Resource.MODULE: Module,
    Resource.ENSEIGNANT: Enseignant,
    Resource.ETUDIANT: Etudiant,
    Resource.SEANCE: Seance,
    Resource.ABSENCE: Absence,
    Resource.JUSTIFICATION: Justification,
}

CRUD = frozenset({Operation.READ, Operation.CREATE, Operation.UPDATE, Operation.DELETE})
READ_ONLY = frozenset({Operation.READ})

CAPABILITIES = {
    Role.ADMIN: {
        **{resource: CRUD for resource in Resource},
        Resource.JUSTIFICATION: CRUD | {Operation.VALIDATE},
    },
    Role.PROFESSOR: {
        Resource.CLASSE: READ_ONLY,
        Resource.MODULE: READ_ONLY,
        Resource.ENSEIGNANT: READ_ONLY,
        Resource.ETUDIANT: READ_ONLY,
        Resource.SEANCE: READ_ONLY,
        Resource.ABSENCE: CRUD,
        Resource.JUSTIFICATION: READ_ONLY,
    },
    Role.STUDENT: {
        Resource.CLASSE: READ_ONLY,
        Resource.MODULE: READ_ONLY,
        Resource.SEANCE: READ_ONLY,
        Resource.ABSENCE: READ_ONLY,
        Resource.JUSTIFICATION: frozenset({Operation.READ, Operation.CREATE}),
    },
}

# Ressource parente dont dépend la création : (ressource, champ de référence)
PARENTS = {
    Resource.ABSENCE: (Resource.SEANCE, "seance_id"),
    Resource.JUSTIFICATION: (Resource.ABSENCE, "absence_id"),
}

MISSING_PARENT = {
    Resource.SEANCE: "Séance introuvable",
    Resource.ABSENCE: "Absence introuvable",
}


@dataclass(frozen=True)
class Scope:
    allowed: bool
    predicate: Optional[Any] = None  # None = aucune restriction


DENY = Scope(allowed=False)


def _taught_seance_ids(enseignant_id: int):
    return select(Seance.id).where(Seance.enseignant_id == enseignant_id)


def _owned_absence_ids(etudiant_id: int):
    return select(Absence.id).where(Absence.etudiant_id == etudiant_id)


def _professor_predicate(enseignant_id: Optional[int], resource: Resource):
    if resource in (Resource.CLASSE, Resource.MODULE, Resource.ETUDIANT):
        return None
    if enseignant_id is None:
        # compte professeur sans fiche enseignant : rien à voir
        return false()
    if resource == Resource.ENSEIGNANT:
        return Enseignant.id == enseignant_id
    if resource == Resource.SEANCE:
        return Seance.enseignant_id == enseignant_id
    if resource == Resource.ABSENCE:
        return Absence.seance_id.in_(_taught_seance_ids(enseignant_id))
    if resource == Resource.JUSTIFICATION:
        absence_ids = select(Absence.id).where(Absence.seance_id.in_(_taught_seance_ids(enseignant_id)))
        return Justification.absence_id.in_(absence_ids)
    return false()


def _student_predicate(etudiant_id: Optional[int], resource: Resource):
    if resource in (Resource.CLASSE, Resource.MODULE):
        return None
    if etudiant_id is None:
        return false()
    if resource == Resource.SEANCE:
        classe_id = select(Etudiant.classe_id).where(Etudiant.id == etudiant_id).scalar_subquery()
        return Seance.classe_id == classe_id
    if resource == Resource.ABSENCE:
        return Absence.etudiant_id == etudiant_id
    if resource == Resource.JUSTIFICATION:
        return Justification.absence_id.in_(_owned_absence_ids(etudiant_id))
    return false()


class AccessPolicy:
    """Décide qui voit / modifie quoi, pour toutes les ressources."""

    def __init__(self, db: Session):
        self._db = db

    @staticmethod
    def permits(caller: Caller, resource: Resource, operation: Operation) -> bool:
        return operation in CAPABILITIES.get(caller.role, {}).get(resource, frozenset())

    @staticmethod
    def predicate(caller: Caller, resource: Resource):
        """Prédicat SQL des enregistrements visibles par l'appelant."""
        if caller.role == Role.ADMIN:
            return None
        if caller.role == Role.PROFESSOR:
            return _professor_predicate(caller.enseignant_id, resource)
        if caller.role == Role.STUDENT:
            return _student_predicate(caller.etudiant_id, resource)
        return false()

    def scope(self, caller: Caller, resource: Resource, operation: Operation, record=None) -> Scope:
        if not self.permits(caller, resource, operation):
            return DENY
        predicate = self.predicate(caller, resource)
        if record is None:
            return Scope(allowed=True, predicate=predicate)
        if predicate is None or self._matches(resource, record.id, predicate):
            return Scope(allowed=True)
        return DENY

    def authorize(self, caller: Caller, resource: Resource, operation: Operation, record=None) -> Scope:
        scope = self.scope(caller, resource, operation, record)
        if not scope.allowed:
            logger.warning(
                "Accès refusé: user=%s role=%s %s %s id=%s",
                caller.id, caller.role.value, operation.value, resource.value,
                getattr(record, "id", None),
            )
            raise Forbidden()
        return scope

    def authorize_candidate(self, caller: Caller, resource: Resource, values: dict) -> None:
        """Le parent visé par une création/modification doit être dans le périmètre.

        Professeur : l'absence doit porter sur une de ses séances.
        Étudiant : la justification doit porter sur une de ses absences.
        """
        if caller.role == Role.ADMIN or resource not in PARENTS:
            return
        parent, field = PARENTS[resource]
        parent_id = values.get(field)
        if parent_id is None:
            return
        # parent inexistant : 400, quel que soit le rôle
        ensure_exists(self._db, MODELS[parent], parent_id, MISSING_PARENT[parent])
        predicate = self.predicate(caller, parent)
        if predicate is not None and not self._matches(parent, parent_id, predicate):
            logger.warning(
                "Accès refusé: user=%s role=%s %s hors périmètre (%s=%s)",
                caller.id, caller.role.value, resource.value, field, parent_id,
            )
            raise Forbidden()

    def filter(self, query, caller: Caller, resource: Resource):
        predicate = self.authorize(caller, resource, Operation.READ).predicate
        return query if predicate is None else query.filter(predicate)

    def _matches(self, resource: Resource, record_id: int, predicate) -> bool:
        model = MODELS[resource]
        return self._db.query(model.id).filter(model.id == record_id, predicate).first() is not None
