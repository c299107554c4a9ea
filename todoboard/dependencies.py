"""
FastAPI dependencies: per-request session, services and the current user.

Application-wide objects (session factory, token service, event dispatcher)
live on ``app.state`` and are set up by ``todoboard.app.create_app``.
"""
import logging
from typing import Iterator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from todoboard.events import EventDispatcher
from todoboard.exceptions import AuthenticationError
from todoboard.identity.provider import SqlAlchemyIdentityProvider
from todoboard.identity.tokens import ACCESS_TOKEN_TYPE, TokenService
from todoboard.models import User
from todoboard.services import TodoItemService, TodoListService

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_session(request: Request) -> Iterator[Session]:
    """Yield a session for the duration of one request."""
    session = request.app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


def get_identity(session: Session = Depends(get_session)) -> SqlAlchemyIdentityProvider:
    return SqlAlchemyIdentityProvider(session)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_dispatcher(request: Request) -> EventDispatcher:
    return request.app.state.dispatcher


def get_todo_list_service(session: Session = Depends(get_session)) -> TodoListService:
    return TodoListService(session)


def get_todo_item_service(
    session: Session = Depends(get_session),
    dispatcher: EventDispatcher = Depends(get_dispatcher),
) -> TodoItemService:
    return TodoItemService(session, dispatcher)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    identity: SqlAlchemyIdentityProvider = Depends(get_identity),
    tokens: TokenService = Depends(get_token_service),
) -> User:
    """
    Resolve the user of a bearer access token.

    Raises:
        AuthenticationError: If the token is missing, invalid, expired, or
            names a user that no longer exists.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Bearer token required")

    token = tokens.decode(credentials.credentials, ACCESS_TOKEN_TYPE)
    user = identity.get_user(int(token.sub))
    if user is None:
        logger.warning(f"Token refers to unknown user {token.sub}")
        raise AuthenticationError("Invalid token")
    return user
