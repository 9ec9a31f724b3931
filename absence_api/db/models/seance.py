from sqlalchemy import Column, Integer, String, Date, ForeignKey
from sqlalchemy.orm import relationship
from absence_api.db.base import Base


class Seance(Base):
    __tablename__ = "seances"

    id = Column(Integer, primary_key=True, index=True)
    date_seance = Column(Date, nullable=False)
    heure_debut = Column(String, nullable=False)  # "08:30", non validé
    heure_fin = Column(String, nullable=False)
    enseignant_id = Column(Integer, ForeignKey("enseignants.id"), nullable=False, index=True)
    module_id = Column(Integer, ForeignKey("modules.id"), nullable=False)
    classe_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True)

    enseignant = relationship("Enseignant")
    module = relationship("Module")
    classe = relationship("Classe")
