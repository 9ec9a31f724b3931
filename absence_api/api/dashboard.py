from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import and_
from sqlalchemy.orm import Session

from absence_api.api.deps import get_current_user, get_db, get_policy
from absence_api.core.auth_service import Caller
from absence_api.core.enums import EtatJustification
from absence_api.core.policy import MODELS, AccessPolicy, Operation, Resource
from absence_api.crud import stats as crud_stats
from absence_api.db.models import Justification

router = APIRouter()


class DashboardStats(BaseModel):
    absences: int
    justifications: int
    justifications_en_attente: int
    seances: int
    # réservés à l'administration
    etudiants: Optional[int] = None
    enseignants: Optional[int] = None
    classes: Optional[int] = None
    modules: Optional[int] = None


def _scoped_count(db: Session, policy: AccessPolicy, caller: Caller, resource: Resource, extra=None) -> int:
    if not policy.permits(caller, resource, Operation.READ):
        return 0
    where = policy.predicate(caller, resource)
    if extra is not None:
        where = extra if where is None else and_(where, extra)
    return crud_stats.count(db, MODELS[resource], where)


@router.get("/stats", response_model=DashboardStats)
def get_stats(
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    stats = {
        "absences": _scoped_count(db, policy, current_user, Resource.ABSENCE),
        "justifications": _scoped_count(db, policy, current_user, Resource.JUSTIFICATION),
        "justifications_en_attente": _scoped_count(
            db, policy, current_user, Resource.JUSTIFICATION,
            extra=Justification.etat == EtatJustification.EN_ATTENTE.value,
        ),
        "seances": _scoped_count(db, policy, current_user, Resource.SEANCE),
    }
    if current_user.is_admin:
        stats["etudiants"] = _scoped_count(db, policy, current_user, Resource.ETUDIANT)
        stats["enseignants"] = _scoped_count(db, policy, current_user, Resource.ENSEIGNANT)
        stats["classes"] = _scoped_count(db, policy, current_user, Resource.CLASSE)
        stats["modules"] = _scoped_count(db, policy, current_user, Resource.MODULE)
    return stats
