from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from absence_api.api.deps import get_current_user, get_db, get_policy
from absence_api.core.auth_service import Caller
from absence_api.core.policy import AccessPolicy, Operation, Resource
from absence_api.crud import etudiant as crud_etudiant
from absence_api.schemas.etudiant import EtudiantCreate, EtudiantOut, EtudiantRead, EtudiantUpdate
from absence_api.schemas.user import MessageOut

router = APIRouter()


@router.get("/", response_model=List[EtudiantRead])
def list_etudiants(
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    scope = policy.authorize(current_user, Resource.ETUDIANT, Operation.READ)
    return crud_etudiant.list_etudiants(db, where=scope.predicate)


@router.get("/{etudiant_id}", response_model=EtudiantRead)
def get_etudiant(
    etudiant_id: int,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.ETUDIANT, Operation.READ)
    etudiant = crud_etudiant.get_etudiant(db, etudiant_id)
    policy.authorize(current_user, Resource.ETUDIANT, Operation.READ, etudiant)
    return etudiant


@router.post("/", response_model=EtudiantOut, status_code=status.HTTP_201_CREATED)
def create_etudiant(
    etudiant_in: EtudiantCreate,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    # pré-enregistrement : le compte sera créé à l'activation
    policy.authorize(current_user, Resource.ETUDIANT, Operation.CREATE)
    return crud_etudiant.create_etudiant(db, etudiant_in)


@router.put("/{etudiant_id}", response_model=EtudiantOut)
def update_etudiant(
    etudiant_id: int,
    etudiant_in: EtudiantUpdate,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.ETUDIANT, Operation.UPDATE)
    etudiant = crud_etudiant.get_etudiant(db, etudiant_id)
    return crud_etudiant.update_etudiant(db, etudiant, etudiant_in)


@router.delete("/{etudiant_id}", response_model=MessageOut)
def delete_etudiant(
    etudiant_id: int,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.ETUDIANT, Operation.DELETE)
    etudiant = crud_etudiant.get_etudiant(db, etudiant_id)
    crud_etudiant.delete_etudiant(db, etudiant)
    return {"message": "Étudiant supprimé avec succès"}
