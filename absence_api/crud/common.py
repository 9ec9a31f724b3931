from contextlib import contextmanager
from typing import Iterable, Sequence, Tuple, Type

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from absence_api.core.errors import AppError, Conflict, NotFound, ReferenceConflict, ValidationError


@contextmanager
def unit_of_work(db: Session, on_conflict: Type[AppError] = Conflict):
    """Commit en sortie, rollback sur n'importe quelle erreur.

    Une violation de contrainte devient ``on_conflict`` (400).
    """
    try:
        yield db
        db.commit()
    except IntegrityError:
        db.rollback()
        raise on_conflict()
    except Exception:
        db.rollback()
        raise


def get_or_404(db: Session, model, obj_id: int, message: str, options: Sequence = ()):
    query = db.query(model)
    if options:
        query = query.options(*options)
    obj = query.filter(model.id == obj_id).first()
    if obj is None:
        raise NotFound(message)
    return obj


def ensure_exists(db: Session, model, obj_id: int, message: str) -> None:
    if db.query(model.id).filter(model.id == obj_id).first() is None:
        raise ValidationError(message)


def ensure_unreferenced(db: Session, obj_id: int, references: Iterable[Tuple[object, str]]) -> None:
    """Refuse la suppression tant qu'une autre table pointe vers obj_id."""
    for column, label in references:
        if db.query(column).filter(column == obj_id).first() is not None:
            raise ReferenceConflict(f"Suppression impossible : la ressource est référencée par {label}.")


def apply_changes(obj, changes: dict, nullable: Iterable[str] = ()) -> None:
    nullable = set(nullable)
    for field, value in changes.items():
        # None sur un champ obligatoire = champ non modifié
        if value is None and field not in nullable:
            continue
        setattr(obj, field, value)
