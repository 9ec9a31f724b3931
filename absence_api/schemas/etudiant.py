from pydantic import AliasChoices, BaseModel, Field
from typing import Optional

from absence_api.schemas.classe import ClasseOut
from absence_api.schemas.fields import NormalizedEmail


class EtudiantCreate(BaseModel):
    nom: str = Field(min_length=1)
    prenom: str = Field(min_length=1)
    email: NormalizedEmail
    # le frontend envoie "classe"
    classe_id: Optional[int] = Field(default=None, validation_alias=AliasChoices("classe_id", "classe"))


class EtudiantUpdate(BaseModel):
    nom: Optional[str] = Field(default=None, min_length=1)
    prenom: Optional[str] = Field(default=None, min_length=1)
    email: Optional[NormalizedEmail] = None
    classe_id: Optional[int] = Field(default=None, validation_alias=AliasChoices("classe_id", "classe"))


class EtudiantOut(BaseModel):
    id: int
    nom: str
    prenom: str
    email: str
    classe_id: Optional[int] = None
    is_activated: bool

    class Config:
        from_attributes = True


class EtudiantRead(EtudiantOut):
    classe: Optional[ClasseOut] = None
