from datetime import datetime, timedelta, timezone
from jose import ExpiredSignatureError, JWTError, jwt

from ..config import JWT_LIFETIME_DAYS, JWT_SECRET
from .error_handlers import UnauthorizedError, get_error_message

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE = timedelta(days=JWT_LIFETIME_DAYS)


def create_access_token(
    data: dict,
    secret_key: str = JWT_SECRET,
    expires_delta: timedelta = ACCESS_TOKEN_EXPIRE,
) -> str:
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    to_encode.update({"iat": now, "exp": now + expires_delta})
    return jwt.encode(to_encode, secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str, secret_key: str = JWT_SECRET) -> dict:
    """
    Verify signature and expiry and return the account claims.

    Raises `UnauthorizedError` for anything that is not a valid, unexpired
    token carrying an integer `account_id`.
    """
    try:
        payload = jwt.decode(token, secret_key, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        raise UnauthorizedError(get_error_message("session_expired")) from None
    except JWTError:
        raise UnauthorizedError(get_error_message("invalid_token")) from None

    account_id = payload.get("account_id")
    if not isinstance(account_id, int) or isinstance(account_id, bool):
        raise UnauthorizedError(get_error_message("invalid_token"))

    return {"account_id": account_id, "name": payload.get("name")}
