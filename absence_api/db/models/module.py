from sqlalchemy import Column, Integer, String, CheckConstraint
from absence_api.db.base import Base


class Module(Base):
    __tablename__ = "modules"
    __table_args__ = (CheckConstraint("coefficient >= 1", name="ck_module_coefficient"),)

    id = Column(Integer, primary_key=True, index=True)
    nom_module = Column(String, nullable=False)
    coefficient = Column(Integer, nullable=False)
