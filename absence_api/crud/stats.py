from sqlalchemy import func
from sqlalchemy.orm import Session


def count(db: Session, model, where=None) -> int:
    query = db.query(func.count(model.id))
    if where is not None:
        query = query.filter(where)
    return query.scalar() or 0
