"""
Identity HTTP API: register, login, refresh and account info.

``map_identity_api`` adds the routes to any ``APIRouter`` so the host decides
where they are mounted.
"""
import logging

from fastapi import APIRouter, Depends, Response, status

from todoboard.dependencies import get_current_user, get_identity, get_token_service
from todoboard.exceptions import AuthenticationError
from todoboard.identity.provider import SqlAlchemyIdentityProvider
from todoboard.identity.tokens import REFRESH_TOKEN_TYPE, TokenService
from todoboard.models import User
from todoboard.schemas import (
    AccessTokenResponse,
    InfoResponse,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
)

logger = logging.getLogger(__name__)


def _token_pair(user: User, tokens: TokenService) -> AccessTokenResponse:
    return AccessTokenResponse(
        access_token=tokens.create_access_token(user),
        expires_in=tokens.settings.access_token_expire_seconds,
        refresh_token=tokens.create_refresh_token(user),
    )


def map_identity_api(router: APIRouter) -> APIRouter:
    """Register the identity routes on ``router`` and return it."""

    @router.post("/register", status_code=status.HTTP_200_OK)
    def register(
        request: RegisterRequest,
        identity: SqlAlchemyIdentityProvider = Depends(get_identity),
    ) -> Response:
        identity.create_user(request.email, request.password, email=request.email)
        return Response(status_code=status.HTTP_200_OK)

    @router.post("/login", response_model=AccessTokenResponse)
    def login(
        request: LoginRequest,
        identity: SqlAlchemyIdentityProvider = Depends(get_identity),
        tokens: TokenService = Depends(get_token_service),
    ):
        user = identity.authenticate(request.email, request.password)
        logger.info(f"User {user.user_name} logged in")
        return _token_pair(user, tokens)

    @router.post("/refresh", response_model=AccessTokenResponse)
    def refresh(
        request: RefreshRequest,
        identity: SqlAlchemyIdentityProvider = Depends(get_identity),
        tokens: TokenService = Depends(get_token_service),
    ):
        token = tokens.decode(request.refresh_token, REFRESH_TOKEN_TYPE)
        user = identity.get_user(int(token.sub))
        if user is None or token.stamp != user.security_stamp:
            raise AuthenticationError("Invalid token")
        return _token_pair(user, tokens)

    @router.get("/manage/info", response_model=InfoResponse)
    def info(user: User = Depends(get_current_user)):
        return InfoResponse(
            email=user.email,
            roles=user.role_names,
            is_email_confirmed=user.email_confirmed,
        )

    return router
