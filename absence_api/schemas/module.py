from pydantic import BaseModel, Field
from typing import Optional


class ModuleCreate(BaseModel):
    nom_module: str = Field(min_length=1)
    coefficient: int = Field(ge=1)


class ModuleUpdate(BaseModel):
    nom_module: Optional[str] = Field(default=None, min_length=1)
    coefficient: Optional[int] = Field(default=None, ge=1)


class ModuleOut(ModuleCreate):
    id: int

    class Config:
        from_attributes = True
