from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from absence_api.api.deps import get_current_user, get_db, get_policy
from absence_api.core.auth_service import Caller
from absence_api.core.policy import AccessPolicy, Operation, Resource
from absence_api.crud import classe as crud_classe
from absence_api.schemas.classe import ClasseCreate, ClasseOut, ClasseUpdate
from absence_api.schemas.user import MessageOut

router = APIRouter()


@router.get("/", response_model=List[ClasseOut])
def list_classes(
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    scope = policy.authorize(current_user, Resource.CLASSE, Operation.READ)
    return crud_classe.list_classes(db, where=scope.predicate)


@router.get("/{classe_id}", response_model=ClasseOut)
def get_classe(
    classe_id: int,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.CLASSE, Operation.READ)
    classe = crud_classe.get_classe(db, classe_id)
    policy.authorize(current_user, Resource.CLASSE, Operation.READ, classe)
    return classe


@router.post("/", response_model=ClasseOut, status_code=status.HTTP_201_CREATED)
def create_classe(
    classe_in: ClasseCreate,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.CLASSE, Operation.CREATE)
    return crud_classe.create_classe(db, classe_in)


@router.put("/{classe_id}", response_model=ClasseOut)
def update_classe(
    classe_id: int,
    classe_in: ClasseUpdate,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.CLASSE, Operation.UPDATE)
    classe = crud_classe.get_classe(db, classe_id)
    policy.authorize(current_user, Resource.CLASSE, Operation.UPDATE, classe)
    return crud_classe.update_classe(db, classe, classe_in)


@router.delete("/{classe_id}", response_model=MessageOut)
def delete_classe(
    classe_id: int,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.CLASSE, Operation.DELETE)
    classe = crud_classe.get_classe(db, classe_id)
    policy.authorize(current_user, Resource.CLASSE, Operation.DELETE, classe)
    crud_classe.delete_classe(db, classe)
    return {"message": "Classe supprimée avec succès"}
