# absence_api/api/deps.py
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from absence_api.core import auth_service
from absence_api.core.auth_service import Caller
from absence_api.core.errors import Unauthorized
from absence_api.core.policy import AccessPolicy
from absence_api.db.session import SessionLocal

bearer_scheme = HTTPBearer(auto_error=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Caller:
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Accès refusé. Aucun token fourni.")
    return auth_service.verify_token(db, credentials.credentials)


def get_policy(db: Session = Depends(get_db)) -> AccessPolicy:
    return AccessPolicy(db)
