import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session, joinedload

from absence_api.core.enums import EtatJustification
from absence_api.core.errors import InvalidTransition, NotFound, ValidationError
from absence_api.crud.common import apply_changes, ensure_exists, get_or_404, unit_of_work
from absence_api.db.models.absence import Absence
from absence_api.db.models.justification import Justification

logger = logging.getLogger(__name__)


def list_justifications(db: Session, where=None):
    query = db.query(Justification).options(joinedload(Justification.absence))
    if where is not None:
        query = query.filter(where)
    return query.order_by(Justification.id).all()


def list_justifications_for_student(db: Session, etudiant_id: int, where=None):
    # la justification ne stocke pas l'étudiant : jointure via l'absence
    query = (
        db.query(Justification)
        .join(Absence, Justification.absence_id == Absence.id)
        .filter(Absence.etudiant_id == etudiant_id)
        .options(joinedload(Justification.absence))
    )
    if where is not None:
        query = query.filter(where)
    return query.order_by(Justification.id).all()


def get_justification(db: Session, justification_id: int):
    return get_or_404(
        db, Justification, justification_id, "Justification non trouvée",
        options=[joinedload(Justification.absence)],
    )


def create_justification(db: Session, justification_data):
    data = justification_data.model_dump()
    ensure_exists(db, Absence, data["absence_id"], "Absence introuvable")
    db_justification = Justification(**data, etat=EtatJustification.EN_ATTENTE.value)
    with unit_of_work(db):
        db.add(db_justification)
    db.refresh(db_justification)
    return db_justification


def update_justification(db: Session, db_justification: Justification, justification_data):
    # l'état ne change que via validate_justification
    changes = justification_data.model_dump(exclude_unset=True)
    if changes.get("absence_id") is not None:
        ensure_exists(db, Absence, changes["absence_id"], "Absence introuvable")
    with unit_of_work(db):
        apply_changes(db_justification, changes, nullable=("commentaire",))
    db.refresh(db_justification)
    return db_justification


def delete_justification(db: Session, db_justification: Justification) -> None:
    with unit_of_work(db):
        db.delete(db_justification)


def validate_justification(db: Session, db_justification: Justification, etat: EtatJustification):
    """en attente -> validé | refusé.

    La validation date l'absence (date_justification) dans la même transaction.
    """
    etat = EtatJustification(etat)
    if etat == EtatJustification.EN_ATTENTE:
        raise ValidationError("Décision invalide : 'validé' ou 'refusé' attendu.")

    with unit_of_work(db):
        # UPDATE conditionnel : une seule décision passe même en concurrence
        decided = (
            db.query(Justification)
            .filter(
                Justification.id == db_justification.id,
                Justification.etat == EtatJustification.EN_ATTENTE.value,
            )
            .update({Justification.etat: etat.value}, synchronize_session=False)
        )
        if not decided:
            raise InvalidTransition()
        if etat == EtatJustification.VALIDE:
            absence = db.get(Absence, db_justification.absence_id)
            if absence is None:
                raise NotFound("Absence non trouvée")
            absence.date_justification = datetime.now(timezone.utc)

    db.refresh(db_justification)
    logger.info("Justification %s : %s", db_justification.id, etat.value)
    return db_justification
