import pytest

from absence_api.core.enums import EtatJustification
from absence_api.core.errors import InvalidTransition, ValidationError
from absence_api.crud import justification as crud_justification
from absence_api.schemas.justification import JustificationCreate, JustificationUpdate


def test_creation_always_pending(db, school):
    created = crud_justification.create_justification(
        db,
        JustificationCreate.model_validate(
            {"absence": school.a1.id, "fichier": "mot.pdf", "etat": "validé"}
        ),
    )
    assert created.etat == EtatJustification.EN_ATTENTE.value


def test_update_cannot_touch_state(db, school):
    updated = crud_justification.update_justification(
        db,
        school.j1,
        JustificationUpdate.model_validate({"commentaire": "scan lisible", "etat": "validé"}),
    )
    assert updated.commentaire == "scan lisible"
    assert updated.etat == EtatJustification.EN_ATTENTE.value


def test_approval_stamps_absence(db, school):
    assert school.a1.date_justification is None
    decided = crud_justification.validate_justification(db, school.j1, EtatJustification.VALIDE)
    assert decided.etat == EtatJustification.VALIDE.value

    db.refresh(school.a1)
    assert school.a1.date_justification is not None


def test_rejection_leaves_absence_untouched(db, school):
    decided = crud_justification.validate_justification(db, school.j2, EtatJustification.REFUSE)
    assert decided.etat == EtatJustification.REFUSE.value

    db.refresh(school.a2)
    assert school.a2.date_justification is None


def test_decision_is_final(db, school):
    crud_justification.validate_justification(db, school.j1, EtatJustification.REFUSE)
    with pytest.raises(InvalidTransition):
        crud_justification.validate_justification(db, school.j1, EtatJustification.VALIDE)

    db.refresh(school.j1)
    db.refresh(school.a1)
    assert school.j1.etat == EtatJustification.REFUSE.value
    assert school.a1.date_justification is None


def test_pending_is_not_a_decision(db, school):
    with pytest.raises(ValidationError):
        crud_justification.validate_justification(db, school.j1, EtatJustification.EN_ATTENTE)
