from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from absence_api.api.deps import get_current_user, get_db, get_policy
from absence_api.core.auth_service import Caller
from absence_api.core.enums import Role
from absence_api.core.errors import Forbidden
from absence_api.core.policy import AccessPolicy, Operation, Resource
from absence_api.crud import absence as crud_absence
from absence_api.schemas.absence import AbsenceCreate, AbsenceOut, AbsenceRead, AbsenceUpdate
from absence_api.schemas.user import MessageOut

router = APIRouter()


@router.get("/", response_model=List[AbsenceRead])
def list_absences(
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    scope = policy.authorize(current_user, Resource.ABSENCE, Operation.READ)
    return crud_absence.list_absences(db, where=scope.predicate)


@router.get("/student/{etudiant_id}", response_model=List[AbsenceRead])
def list_student_absences(
    etudiant_id: int,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    scope = policy.authorize(current_user, Resource.ABSENCE, Operation.READ)
    if current_user.role == Role.STUDENT and current_user.etudiant_id != etudiant_id:
        raise Forbidden()
    return crud_absence.list_absences(db, where=scope.predicate, etudiant_id=etudiant_id)


@router.get("/{absence_id}", response_model=AbsenceRead)
def get_absence(
    absence_id: int,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.ABSENCE, Operation.READ)
    absence = crud_absence.get_absence(db, absence_id)
    policy.authorize(current_user, Resource.ABSENCE, Operation.READ, absence)
    return absence


@router.post("/", response_model=AbsenceOut, status_code=status.HTTP_201_CREATED)
def create_absence(
    absence_in: AbsenceCreate,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.ABSENCE, Operation.CREATE)
    # un professeur ne saisit que sur ses propres séances
    policy.authorize_candidate(current_user, Resource.ABSENCE, absence_in.model_dump())
    return crud_absence.create_absence(db, absence_in)


@router.put("/{absence_id}", response_model=AbsenceOut)
def update_absence(
    absence_id: int,
    absence_in: AbsenceUpdate,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.ABSENCE, Operation.UPDATE)
    absence = crud_absence.get_absence(db, absence_id)
    policy.authorize(current_user, Resource.ABSENCE, Operation.UPDATE, absence)
    policy.authorize_candidate(current_user, Resource.ABSENCE, absence_in.model_dump(exclude_unset=True))
    return crud_absence.update_absence(db, absence, absence_in)


@router.delete("/{absence_id}", response_model=MessageOut)
def delete_absence(
    absence_id: int,
    db: Session = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.authorize(current_user, Resource.ABSENCE, Operation.DELETE)
    absence = crud_absence.get_absence(db, absence_id)
    policy.authorize(current_user, Resource.ABSENCE, Operation.DELETE, absence)
    crud_absence.delete_absence(db, absence)
    return {"message": "Absence supprimée avec succès"}
