"""
Users endpoint group: the identity API mounted under ``/api/Users``.
"""
from fastapi import APIRouter

from todoboard.identity.api import map_identity_api

router = map_identity_api(APIRouter(prefix="/api/Users", tags=["Users"]))
