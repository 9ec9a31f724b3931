from sqlalchemy import Column, Integer, Text, Enum, ForeignKey, DateTime
from sqlalchemy.orm import relationship

from absence_api.core.enums import StatutAbsence
from absence_api.db.base import Base


class Absence(Base):
    __tablename__ = "absences"

    id = Column(Integer, primary_key=True, index=True)
    etudiant_id = Column(Integer, ForeignKey("etudiants.id"), nullable=False, index=True)
    seance_id = Column(Integer, ForeignKey("seances.id"), nullable=False, index=True)
    statut = Column(
        Enum(*[s.value for s in StatutAbsence], name="statut_absence"),
        nullable=False,
        default=StatutAbsence.ABSENT.value,
    )
    motif = Column(Text, nullable=True)
    # Renseignée uniquement lorsqu'une justification est validée
    date_justification = Column(DateTime(timezone=True), nullable=True)

    etudiant = relationship("Etudiant")
    seance = relationship("Seance")
