"""
Database initialisation and demo seeding.

``DatabaseInitialiser.initialise`` drops and recreates the whole schema on
every call, so every startup begins from an empty database. Use it only with
demo and development databases.

Seeding is idempotent through three independent checks (role, user, lists),
each committed on its own.  A failure part way leaves earlier steps in place
and the next run resumes from the first missing piece.
"""
import logging
from typing import Callable, Optional

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from todoboard.data.seed_data import (
    ADMINISTRATOR_EMAIL,
    ADMINISTRATOR_PASSWORD,
    ADMINISTRATOR_ROLE,
    ADMINISTRATOR_USER_NAME,
    build_sample_lists,
)
from todoboard.database import Base, session_scope
from todoboard.identity.provider import IdentityProvider, SqlAlchemyIdentityProvider
from todoboard.models import TodoList

logger = logging.getLogger(__name__)


class DatabaseInitialiser:
    """Resets the schema and writes the demo data."""

    def __init__(self, engine: Engine, session: Session, identity: IdentityProvider):
        self.engine = engine
        self.session = session
        self.identity = identity

    def initialise(self) -> None:
        """Drop and recreate every table. Errors are logged and re-raised."""
        try:
            Base.metadata.drop_all(bind=self.engine)
            Base.metadata.create_all(bind=self.engine)
        except Exception:
            logger.exception("An error occurred while initialising the database.")
            raise
        logger.info("Database schema recreated")

    def seed(self) -> None:
        """Run ``try_seed``. Errors are logged and re-raised."""
        try:
            self.try_seed()
        except Exception:
            logger.exception("An error occurred while seeding the database.")
            raise

    def try_seed(self) -> None:
        # Default roles
        if not self.identity.role_exists(ADMINISTRATOR_ROLE):
            self.identity.create_role(ADMINISTRATOR_ROLE)

        # Default users
        if self.identity.find_user_by_name(ADMINISTRATOR_USER_NAME) is None:
            administrator = self.identity.create_user(
                ADMINISTRATOR_USER_NAME,
                ADMINISTRATOR_PASSWORD,
                email=ADMINISTRATOR_EMAIL,
            )
            self.identity.add_to_roles(administrator, [ADMINISTRATOR_ROLE])

        # Default data
        if self.session.scalar(select(TodoList.id).limit(1)) is None:
            lists = build_sample_lists()
            self.session.add_all(lists)
            self.session.commit()
            logger.info(f"Seeded {len(lists)} todo lists")


IdentityFactory = Callable[[Session], IdentityProvider]


def initialise_database(
    engine: Engine,
    session_factory: sessionmaker,
    identity_factory: Optional[IdentityFactory] = None,
) -> None:
    """
    Startup contract: reset the schema, then seed it, in that order.

    Args:
        engine: Engine whose schema is recreated
        session_factory: Factory for the seeding session
        identity_factory: Builds the identity provider for a session
            (defaults to SqlAlchemyIdentityProvider)
    """
    identity_factory = identity_factory or SqlAlchemyIdentityProvider
    with session_scope(session_factory) as session:
        initialiser = DatabaseInitialiser(engine, session, identity_factory(session))
        initialiser.initialise()
        initialiser.seed()
