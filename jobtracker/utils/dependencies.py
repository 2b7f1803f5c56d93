from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ..services.accounts import AccountStore
from ..services.jobs import JobStore
from .error_handlers import UnauthorizedError, get_error_message
from .jwt import decode_access_token

# auto_error=False so a missing header is a 401 from us, not FastAPI's default.
bearer_scheme = HTTPBearer(auto_error=False)


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_account_store(request: Request, db: Session = Depends(get_db)) -> AccountStore:
    return AccountStore(db, secret_key=request.app.state.secret_key)


def get_job_store(db: Session = Depends(get_db)) -> JobStore:
    return JobStore(db)


def get_current_account(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict:
    """Resolve the caller from the bearer token. Runs before any store call."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError(get_error_message("unauthorized"))
    return decode_access_token(credentials.credentials, secret_key=request.app.state.secret_key)
