from pydantic import AliasChoices, BaseModel, Field
from datetime import datetime
from typing import Optional

from absence_api.core.enums import StatutAbsence
from absence_api.schemas.etudiant import EtudiantOut
from absence_api.schemas.seance import SeanceOut


class AbsenceCreate(BaseModel):
    etudiant_id: int = Field(validation_alias=AliasChoices("etudiant_id", "etudiant"))
    seance_id: int = Field(validation_alias=AliasChoices("seance_id", "seance"))
    statut: StatutAbsence = StatutAbsence.ABSENT
    motif: Optional[str] = None


class AbsenceUpdate(BaseModel):
    etudiant_id: Optional[int] = Field(default=None, validation_alias=AliasChoices("etudiant_id", "etudiant"))
    seance_id: Optional[int] = Field(default=None, validation_alias=AliasChoices("seance_id", "seance"))
    statut: Optional[StatutAbsence] = None
    motif: Optional[str] = None


class AbsenceOut(BaseModel):
    id: int
    etudiant_id: int
    seance_id: int
    statut: StatutAbsence
    motif: Optional[str] = None
    date_justification: Optional[datetime] = None

    class Config:
        from_attributes = True


class AbsenceRead(AbsenceOut):
    etudiant: Optional[EtudiantOut] = None
    seance: Optional[SeanceOut] = None
