from sqlalchemy import Column, Integer, String
from absence_api.db.base import Base


class Classe(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, index=True)
    nom_classe = Column(String, nullable=False)
    niveau = Column(String, nullable=False)  # "L1", "M2", ...
    departement = Column(String, nullable=False)
    filiere = Column(String, nullable=False)
