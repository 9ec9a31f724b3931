from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from absence_api.api.deps import get_current_user, get_db, get_policy
from absence_api.core.auth_service import Caller
from absence_api.core.enums import EtatJustification, Role
from absence_api.core.errors import Forbidden
from absence_api.core.policy import AccessPolicy, Operation, Resource
from absence_api.crud import justification as crud_justification
from absence_api.schemas.justification import (
    JustificationCreate,
    JustificationDecision,
    JustificationOut,
    JustificationRead,
    JustificationUpdate,
)
from absence_api.schemas.user import MessageOut

router = APIRouter()


@router.get("/", response_model=List[JustificationRead])
def list_justifications(
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    scope = policy.authorize(current_user, Resource.JUSTIFICATION, Operation.READ)
    return crud_justification.list_justifications(db, where=scope.predicate)


@router.get("/student/{etudiant_id}", response_model=List[JustificationRead])
def list_student_justifications(
    etudiant_id: int,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    scope = policy.authorize(current_user, Resource.JUSTIFICATION, Operation.READ)
    if current_user.role == Role.STUDENT and current_user.etudiant_id != etudiant_id:
        raise Forbidden()
    return crud_justification.list_justifications_for_student(db, etudiant_id, where=scope.predicate)


@router.get("/{justification_id}", response_model=JustificationRead)
def get_justification(
    justification_id: int,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.JUSTIFICATION, Operation.READ)
    justification = crud_justification.get_justification(db, justification_id)
    policy.authorize(current_user, Resource.JUSTIFICATION, Operation.READ, justification)
    return justification


@router.post("/", response_model=JustificationOut, status_code=status.HTTP_201_CREATED)
def create_justification(
    justification_in: JustificationCreate,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.JUSTIFICATION, Operation.CREATE)
    policy.authorize_candidate(current_user, Resource.JUSTIFICATION, justification_in.model_dump())
    return crud_justification.create_justification(db, justification_in)


@router.put("/{justification_id}", response_model=JustificationOut)
def update_justification(
    justification_id: int,
    justification_in: JustificationUpdate,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.JUSTIFICATION, Operation.UPDATE)
    justification = crud_justification.get_justification(db, justification_id)
    return crud_justification.update_justification(db, justification, justification_in)


@router.post("/{justification_id}/validate", response_model=JustificationRead)
def validate_justification(
    justification_id: int,
    decision: JustificationDecision,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    """Décision administrative : validé ou refusé, une seule fois."""
    policy.authorize(current_user, Resource.JUSTIFICATION, Operation.VALIDATE)
    justification = crud_justification.get_justification(db, justification_id)
    crud_justification.validate_justification(db, justification, EtatJustification(decision.etat))
    # recharge l'absence pour exposer date_justification
    return crud_justification.get_justification(db, justification_id)


@router.delete("/{justification_id}", response_model=MessageOut)
def delete_justification(
    justification_id: int,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.JUSTIFICATION, Operation.DELETE)
    justification = crud_justification.get_justification(db, justification_id)
    crud_justification.delete_justification(db, justification)
    return {"message": "Justification supprimée avec succès"}
