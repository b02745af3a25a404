"""
User Repository

Storage for the account service. Digests are stored as handed in;
hashing happens in the caller.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError

from .database import Repository
from .models import UserModel, as_utc


class DuplicateEmailError(Exception):
    """Raised when the email is already registered."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email already registered: {email}")


@dataclass
class StoredUser:
    """User record including the password digest.

    ``to_public`` is what leaves the service.
    """

    id: int
    email: str
    name: str
    password: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, model: UserModel) -> "StoredUser":
        return cls(
            id=model.id,
            email=model.email,
            name=model.name,
            password=model.password,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def to_public(self) -> dict:
        """Fields safe to return to clients."""
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


class UserRepository(Repository):
    """Repository for registered users."""

    tables = (UserModel.__table__,)

    def create(self, email: str, hashed_password: str, name: str) -> StoredUser:
        """
        Insert a new user.

        Raises:
            DuplicateEmailError: if the email is taken, including when a
                concurrent registration wins the race to the unique index.
        """
        with self.get_session() as session:
            existing = session.query(UserModel.id).filter(UserModel.email == email).first()
            if existing:
                raise DuplicateEmailError(email)

            user = UserModel(email=email, password=hashed_password, name=name)
            session.add(user)
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                raise DuplicateEmailError(email) from e
            session.refresh(user)

            return StoredUser.from_model(user)

    def get(self, user_id: int) -> Optional[StoredUser]:
        with self.get_session() as session:
            user = session.get(UserModel, user_id)
            if user:
                return StoredUser.from_model(user)
            return None

    def get_by_email(self, email: str) -> Optional[StoredUser]:
        with self.get_session() as session:
            user = session.query(UserModel).filter(UserModel.email == email).first()
            if user:
                return StoredUser.from_model(user)
            return None
