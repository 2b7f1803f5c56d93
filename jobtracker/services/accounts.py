"""
Account store: registered users, their password hashes, and the tokens
issued to them.
"""
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import JWT_SECRET
from ..database import Base
from ..models.user import User
from ..utils.error_handlers import ConflictError, classify_database_error, get_error_message
from ..utils.jwt import create_access_token
from ..utils.security import hash_password, verify_password
from ..utils.validation import validate_email, validate_name, validate_password

logger = logging.getLogger(__name__)


class AccountStore:
    def __init__(self, db: Session, secret_key: str = JWT_SECRET):
        self.db = db
        self.secret_key = secret_key

    def initialize(self) -> None:
        """Create the users table if it doesn't exist. Existing tables are left alone."""
        Base.metadata.create_all(bind=self.db.get_bind(), tables=[User.__table__], checkfirst=True)

    def create_account(self, name: str, email: str, password: str) -> User:
        name = validate_name(name)
        email = validate_email(email)
        validate_password(password)

        if self.find_by_email(email) is not None:
            raise ConflictError(get_error_message("email_exists"))

        user = User(name=name, email=email, password=hash_password(password))
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except SQLAlchemyError as e:
            self.db.rollback()
            error = classify_database_error(e, "creating account")
            if isinstance(error, ConflictError):
                # Lost a race with a concurrent registration for the same email.
                raise ConflictError(get_error_message("email_exists")) from e
            raise error from e

        logger.info("Created account %s", user.id)
        return user

    def find_by_email(self, email: str) -> User | None:
        if not email or not isinstance(email, str):
            return None
        try:
            return self.db.query(User).filter(User.email == email.strip().lower()).first()
        except SQLAlchemyError as e:
            raise classify_database_error(e, "looking up account") from e

    def verify_password(self, candidate: str, stored_hash: str) -> bool:
        return verify_password(candidate, stored_hash)

    def issue_token(self, account: User) -> str:
        return create_access_token(
            {"account_id": account.id, "name": account.name},
            secret_key=self.secret_key,
        )

    def delete_account(self, account_id: int) -> int:
        """Remove an account; its jobs are removed by the foreign key cascade."""
        try:
            count = (
                self.db.query(User)
                .filter(User.id == account_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise classify_database_error(e, "deleting account") from e

        if count:
            logger.info("Deleted account %s", account_id)
        return count
