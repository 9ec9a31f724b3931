from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from absence_api.api.deps import get_current_user, get_db, get_policy
from absence_api.core.auth_service import Caller
from absence_api.core.policy import AccessPolicy, Operation, Resource
from absence_api.crud import module as crud_module
from absence_api.schemas.module import ModuleCreate, ModuleOut, ModuleUpdate
from absence_api.schemas.user import MessageOut

router = APIRouter()


@router.get("/", response_model=List[ModuleOut])
def list_modules(
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    scope = policy.authorize(current_user, Resource.MODULE, Operation.READ)
    return crud_module.list_modules(db, where=scope.predicate)


@router.get("/{module_id}", response_model=ModuleOut)
def get_module(
    module_id: int,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.MODULE, Operation.READ)
    module = crud_module.get_module(db, module_id)
    policy.authorize(current_user, Resource.MODULE, Operation.READ, module)
    return module


@router.post("/", response_model=ModuleOut, status_code=status.HTTP_201_CREATED)
def create_module(
    module_in: ModuleCreate,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.MODULE, Operation.CREATE)
    return crud_module.create_module(db, module_in)


@router.put("/{module_id}", response_model=ModuleOut)
def update_module(
    module_id: int,
    module_in: ModuleUpdate,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.MODULE, Operation.UPDATE)
    module = crud_module.get_module(db, module_id)
    policy.authorize(current_user, Resource.MODULE, Operation.UPDATE, module)
    return crud_module.update_module(db, module, module_in)


@router.delete("/{module_id}", response_model=MessageOut)
def delete_module(
    module_id: int,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.MODULE, Operation.DELETE)
    module = crud_module.get_module(db, module_id)
    crud_module.delete_module(db, module)
    return {"message": "Module supprimé avec succès"}
