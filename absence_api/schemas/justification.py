from pydantic import AliasChoices, BaseModel, Field
from datetime import datetime
from typing import Literal, Optional

from absence_api.core.enums import EtatJustification
from absence_api.schemas.absence import AbsenceOut


class JustificationCreate(BaseModel):
    # "etat" éventuellement envoyé par le client est ignoré : toujours "en attente"
    absence_id: int = Field(validation_alias=AliasChoices("absence_id", "absence"))
    fichier: str = Field(min_length=1)
    commentaire: Optional[str] = None


class JustificationUpdate(BaseModel):
    absence_id: Optional[int] = Field(default=None, validation_alias=AliasChoices("absence_id", "absence"))
    fichier: Optional[str] = Field(default=None, min_length=1)
    commentaire: Optional[str] = None


class JustificationDecision(BaseModel):
    etat: Literal["validé", "refusé"]


class JustificationOut(BaseModel):
    id: int
    absence_id: int
    fichier: str
    commentaire: Optional[str] = None
    etat: EtatJustification
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class JustificationRead(JustificationOut):
    absence: Optional[AbsenceOut] = None
