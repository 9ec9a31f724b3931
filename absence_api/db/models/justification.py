from sqlalchemy import Column, Integer, String, Text, Enum, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from absence_api.core.enums import EtatJustification
from absence_api.db.base import Base


class Justification(Base):
    __tablename__ = "justifications"

    id = Column(Integer, primary_key=True, index=True)
    absence_id = Column(Integer, ForeignKey("absences.id"), nullable=False, index=True)
    fichier = Column(String, nullable=False)
    commentaire = Column(Text, nullable=True)
    etat = Column(
        Enum(*[e.value for e in EtatJustification], name="etat_justification"),
        nullable=False,
        default=EtatJustification.EN_ATTENTE.value,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    absence = relationship("Absence")
