"""
Identity subsystem: users, roles, password hashing and bearer tokens.
"""
from todoboard.identity.passwords import PasswordPolicy, hash_password, verify_password
from todoboard.identity.provider import IdentityProvider, SqlAlchemyIdentityProvider
from todoboard.identity.tokens import TokenService

__all__ = [
    "IdentityProvider",
    "SqlAlchemyIdentityProvider",
    "PasswordPolicy",
    "TokenService",
    "hash_password",
    "verify_password",
]
