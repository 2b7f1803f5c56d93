from fastapi import APIRouter, Depends
from pydantic import BaseModel
import logging

from ..config import API_PREFIX
from ..models.user import User
from ..services.accounts import AccountStore
from ..utils.dependencies import get_account_store, get_current_account
from ..utils.error_handlers import (
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    get_error_message,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{API_PREFIX}/auth", tags=["Auth"])


class RegisterRequest(BaseModel):
    # Optional at the schema level so missing fields come back as 400s from the store.
    name: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


def _account_summary(user: User) -> dict:
    return {"id": user.id, "name": user.name, "email": user.email}


@router.post("/register", status_code=201)
def register(payload: RegisterRequest, accounts: AccountStore = Depends(get_account_store)):
    user = accounts.create_account(payload.name, payload.email, payload.password)
    token = accounts.issue_token(user)

    return {
        "success": True,
        "user": _account_summary(user),
        "access_token": token,
        "token_type": "bearer",
    }


@router.post("/login")
def login(payload: LoginRequest, accounts: AccountStore = Depends(get_account_store)):
    if not payload.email or not payload.password:
        raise ValidationError(get_error_message("missing_credentials"))

    user = accounts.find_by_email(payload.email)
    if not user:
        raise UnauthorizedError(get_error_message("invalid_credentials"))

    try:
        password_ok = accounts.verify_password(payload.password, user.password)
    except ValueError as e:
        # Stored hash is unreadable; treat as a failed login rather than a 500.
        logger.error(f"Password verification error for account {user.id}: {e}")
        password_ok = False

    if not password_ok:
        raise UnauthorizedError(get_error_message("invalid_credentials"))

    return {
        "success": True,
        "user": _account_summary(user),
        "access_token": accounts.issue_token(user),
        "token_type": "bearer",
    }


@router.delete("/account")
def delete_account(
    account=Depends(get_current_account),
    accounts: AccountStore = Depends(get_account_store),
):
    account_id = account["account_id"]
    if not accounts.delete_account(account_id):
        raise NotFoundError(get_error_message("not_found"))
    return {"success": True, "deleted_account_id": account_id}
