from sqlalchemy import Column, Integer, String, ForeignKey, Table
from sqlalchemy.orm import relationship
from absence_api.db.base import Base

# many-to-many enseignant <-> classe
enseignant_classes = Table(
    "enseignant_classes",
    Base.metadata,
    Column("enseignant_id", Integer, ForeignKey("enseignants.id"), primary_key=True),
    Column("classe_id", Integer, ForeignKey("classes.id"), primary_key=True),
)


class Enseignant(Base):
    __tablename__ = "enseignants"

    id = Column(Integer, primary_key=True, index=True)
    nom = Column(String, nullable=False)
    prenom = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    telephone = Column(String, nullable=False)

    classes = relationship("Classe", secondary=enseignant_classes, order_by="Classe.id")

    @property
    def classe_ids(self):
        return [c.id for c in self.classes]
