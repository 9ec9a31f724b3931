from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from absence_api.api.deps import get_current_user, get_db, get_policy
from absence_api.core.auth_service import Caller
from absence_api.core.policy import AccessPolicy, Operation, Resource
from absence_api.crud import seance as crud_seance
from absence_api.schemas.seance import SeanceCreate, SeanceOut, SeanceRead, SeanceUpdate
from absence_api.schemas.user import MessageOut

router = APIRouter()


@router.get("/", response_model=List[SeanceRead])
def list_seances(
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    # professeur : ses séances ; étudiant : celles de sa classe
    scope = policy.authorize(current_user, Resource.SEANCE, Operation.READ)
    return crud_seance.list_seances(db, where=scope.predicate)


@router.get("/{seance_id}", response_model=SeanceRead)
def get_seance(
    seance_id: int,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.SEANCE, Operation.READ)
    seance = crud_seance.get_seance(db, seance_id)
    policy.authorize(current_user, Resource.SEANCE, Operation.READ, seance)
    return seance


@router.post("/", response_model=SeanceOut, status_code=status.HTTP_201_CREATED)
def create_seance(
    seance_in: SeanceCreate,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.SEANCE, Operation.CREATE)
    return crud_seance.create_seance(db, seance_in)


@router.put("/{seance_id}", response_model=SeanceOut)
def update_seance(
    seance_id: int,
    seance_in: SeanceUpdate,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.SEANCE, Operation.UPDATE)
    seance = crud_seance.get_seance(db, seance_id)
    return crud_seance.update_seance(db, seance, seance_in)


@router.delete("/{seance_id}", response_model=MessageOut)
def delete_seance(
    seance_id: int,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.SEANCE, Operation.DELETE)
    seance = crud_seance.get_seance(db, seance_id)
    crud_seance.delete_seance(db, seance)
    return {"message": "Séance supprimée avec succès"}
