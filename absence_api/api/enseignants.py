from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from absence_api.api.deps import get_current_user, get_db, get_policy
from absence_api.core.auth_service import Caller
from absence_api.core.policy import AccessPolicy, Operation, Resource
from absence_api.crud import enseignant as crud_enseignant
from absence_api.schemas.enseignant import EnseignantCreate, EnseignantOut, EnseignantRead, EnseignantUpdate
from absence_api.schemas.user import MessageOut

router = APIRouter()


@router.get("/", response_model=List[EnseignantRead])
def list_enseignants(
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    scope = policy.authorize(current_user, Resource.ENSEIGNANT, Operation.READ)
    return crud_enseignant.list_enseignants(db, where=scope.predicate)


@router.get("/{enseignant_id}", response_model=EnseignantRead)
def get_enseignant(
    enseignant_id: int,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.ENSEIGNANT, Operation.READ)
    enseignant = crud_enseignant.get_enseignant(db, enseignant_id)
    policy.authorize(current_user, Resource.ENSEIGNANT, Operation.READ, enseignant)
    return enseignant


@router.post("/", response_model=EnseignantOut, status_code=status.HTTP_201_CREATED)
def create_enseignant(
    enseignant_in: EnseignantCreate,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    """Crée la fiche enseignant et son compte professeur."""
    policy.authorize(current_user, Resource.ENSEIGNANT, Operation.CREATE)
    return crud_enseignant.create_enseignant(db, enseignant_in)


@router.put("/{enseignant_id}", response_model=EnseignantOut)
def update_enseignant(
    enseignant_id: int,
    enseignant_in: EnseignantUpdate,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.ENSEIGNANT, Operation.UPDATE)
    enseignant = crud_enseignant.get_enseignant(db, enseignant_id)
    return crud_enseignant.update_enseignant(db, enseignant, enseignant_in)


@router.delete("/{enseignant_id}", response_model=MessageOut)
def delete_enseignant(
    enseignant_id: int,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.ENSEIGNANT, Operation.DELETE)
    enseignant = crud_enseignant.get_enseignant(db, enseignant_id)
    crud_enseignant.delete_enseignant(db, enseignant)
    return {"message": "Enseignant supprimé avec succès"}
