"""
Identity provider: role and user management behind a minimal interface.

``IdentityProvider`` is the seam the rest of the application depends on
(create a role, create a user, assign roles, authenticate).
``SqlAlchemyIdentityProvider`` stores identities in the application database
and commits after every successful operation, so each call is its own unit of
work.
"""
import logging
import uuid
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from todoboard.exceptions import AuthenticationError, IdentityError
from todoboard.identity.passwords import PasswordPolicy, hash_password, verify_password
from todoboard.models import Role, User

logger = logging.getLogger(__name__)


def normalize(name: str) -> str:
    return name.strip().upper()


class IdentityProvider(ABC):
    """Abstract identity contract used by seeding and the identity API."""

    @abstractmethod
    def role_exists(self, name: str) -> bool:
        """Return True if a role with ``name`` exists."""

    @abstractmethod
    def create_role(self, name: str) -> Role:
        """Create and return a role."""

    @abstractmethod
    def find_user_by_name(self, user_name: str) -> Optional[User]:
        """Return the user with ``user_name`` or None."""

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Return the user with ``user_id`` or None."""

    @abstractmethod
    def create_user(self, user_name: str, password: str, email: Optional[str] = None) -> User:
        """Create a user with a hashed password. Raises IdentityError on invalid input."""

    @abstractmethod
    def add_to_roles(self, user: User, role_names: Iterable[str]) -> None:
        """Add ``user`` to every role in ``role_names``."""

    @abstractmethod
    def authenticate(self, user_name: str, password: str) -> User:
        """Return the user if the password matches. Raises AuthenticationError otherwise."""


class SqlAlchemyIdentityProvider(IdentityProvider):
    """Identity provider backed by the ``users``/``roles`` tables."""

    def __init__(self, session: Session, password_policy: Optional[PasswordPolicy] = None):
        self.session = session
        self.password_policy = password_policy or PasswordPolicy()

    def _find_role(self, name: str) -> Optional[Role]:
        stmt = select(Role).where(Role.normalized_name == normalize(name))
        return self.session.scalars(stmt).first()

    def role_exists(self, name: str) -> bool:
        return self._find_role(name) is not None

    def create_role(self, name: str) -> Role:
        if not name or not name.strip():
            raise IdentityError({"InvalidRoleName": [f"Role name '{name}' is invalid."]})
        if self.role_exists(name):
            raise IdentityError({"DuplicateRoleName": [f"Role name '{name}' is already taken."]})

        role = Role(name=name, normalized_name=normalize(name))
        self.session.add(role)
        self.session.commit()
        logger.info(f"Created role {name}")
        return role

    def find_user_by_name(self, user_name: str) -> Optional[User]:
        stmt = select(User).where(User.normalized_user_name == normalize(user_name))
        return self.session.scalars(stmt).first()

    def get_user(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def create_user(self, user_name: str, password: str, email: Optional[str] = None) -> User:
        errors = {}
        if not user_name or "@" not in user_name:
            errors["InvalidEmail"] = [f"Email '{user_name}' is invalid."]
        elif self.find_user_by_name(user_name) is not None:
            errors["DuplicateUserName"] = [f"Username '{user_name}' is already taken."]
        errors.update(self.password_policy.validate(password or ""))
        if errors:
            raise IdentityError(errors)

        user = User(
            user_name=user_name,
            normalized_user_name=normalize(user_name),
            email=email if email is not None else user_name,
            password_hash=hash_password(password),
            security_stamp=uuid.uuid4().hex,
        )
        self.session.add(user)
        self.session.commit()
        logger.info(f"Created user {user_name}")
        return user

    def add_to_roles(self, user: User, role_names: Iterable[str]) -> None:
        for role_name in role_names:
            role = self._find_role(role_name)
            if role is None:
                raise IdentityError({"RoleNotFound": [f"Role {role_name} does not exist."]})
            if role in user.roles:
                raise IdentityError({"UserAlreadyInRole": [f"User already in role '{role_name}'."]})
            user.roles.append(role)
        self.session.commit()
        logger.info(f"Added user {user.user_name} to roles {', '.join(user.role_names)}")

    def is_in_role(self, user: User, role_name: str) -> bool:
        return normalize(role_name) in {role.normalized_name for role in user.roles}

    def authenticate(self, user_name: str, password: str) -> User:
        user = self.find_user_by_name(user_name)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning(f"Failed login attempt for {user_name}")
            raise AuthenticationError("Invalid credentials")
        return user
