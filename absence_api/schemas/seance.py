from pydantic import AliasChoices, BaseModel, Field
from datetime import date
from typing import Optional

from absence_api.schemas.classe import ClasseOut
from absence_api.schemas.enseignant import EnseignantOut
from absence_api.schemas.module import ModuleOut


class SeanceCreate(BaseModel):
    date_seance: date
    heure_debut: str = Field(min_length=1)
    heure_fin: str = Field(min_length=1)
    enseignant_id: int = Field(validation_alias=AliasChoices("enseignant_id", "enseignant"))
    module_id: int = Field(validation_alias=AliasChoices("module_id", "module"))
    classe_id: int = Field(validation_alias=AliasChoices("classe_id", "classe"))


class SeanceUpdate(BaseModel):
    date_seance: Optional[date] = None
    heure_debut: Optional[str] = Field(default=None, min_length=1)
    heure_fin: Optional[str] = Field(default=None, min_length=1)
    enseignant_id: Optional[int] = Field(default=None, validation_alias=AliasChoices("enseignant_id", "enseignant"))
    module_id: Optional[int] = Field(default=None, validation_alias=AliasChoices("module_id", "module"))
    classe_id: Optional[int] = Field(default=None, validation_alias=AliasChoices("classe_id", "classe"))


class SeanceOut(BaseModel):
    id: int
    date_seance: date
    heure_debut: str
    heure_fin: str
    enseignant_id: int
    module_id: int
    classe_id: int

    class Config:
        from_attributes = True


class SeanceRead(SeanceOut):
    enseignant: Optional[EnseignantOut] = None
    module: Optional[ModuleOut] = None
    classe: Optional[ClasseOut] = None
