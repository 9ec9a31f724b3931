from pydantic import BaseModel, Field
from typing import List, Optional

from absence_api.schemas.classe import ClasseOut
from absence_api.schemas.fields import NormalizedEmail


class EnseignantCreate(BaseModel):
    nom: str = Field(min_length=1)
    prenom: str = Field(min_length=1)
    email: NormalizedEmail
    password: str = Field(min_length=6)
    telephone: str = Field(min_length=1)
    classes: List[int] = []  # ids de classes


class EnseignantUpdate(BaseModel):
    nom: Optional[str] = Field(default=None, min_length=1)
    prenom: Optional[str] = Field(default=None, min_length=1)
    email: Optional[NormalizedEmail] = None
    password: Optional[str] = Field(default=None, min_length=6)
    telephone: Optional[str] = Field(default=None, min_length=1)
    classes: Optional[List[int]] = None


class EnseignantOut(BaseModel):
    id: int
    nom: str
    prenom: str
    email: str
    telephone: str
    classe_ids: List[int] = []

    class Config:
        from_attributes = True


class EnseignantRead(EnseignantOut):
    classes: List[ClasseOut] = []
