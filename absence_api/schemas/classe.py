from pydantic import BaseModel, Field
from typing import Optional


class ClasseBase(BaseModel):
    nom_classe: str = Field(min_length=1)
    niveau: str = Field(min_length=1)
    departement: str = Field(min_length=1)
    filiere: str = Field(min_length=1)


class ClasseCreate(ClasseBase):
    pass


class ClasseUpdate(BaseModel):
    nom_classe: Optional[str] = Field(default=None, min_length=1)
    niveau: Optional[str] = Field(default=None, min_length=1)
    departement: Optional[str] = Field(default=None, min_length=1)
    filiere: Optional[str] = Field(default=None, min_length=1)


class ClasseOut(ClasseBase):
    id: int

    class Config:
        from_attributes = True
