"""
Password hashing and password policy.

Hashing uses passlib's PBKDF2-SHA256 scheme.  The policy mirrors the common
identity defaults: at least six characters with a digit, a lowercase letter,
an uppercase letter and a non-alphanumeric character.
"""
from dataclasses import dataclass
from typing import Dict, List

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


@dataclass(frozen=True)
class PasswordPolicy:
    """Rules a new password has to satisfy."""

    required_length: int = 6
    require_digit: bool = True
    require_lowercase: bool = True
    require_uppercase: bool = True
    require_non_alphanumeric: bool = True

    def validate(self, password: str) -> Dict[str, List[str]]:
        """Return a mapping of error code to descriptions; empty when valid."""
        errors: Dict[str, List[str]] = {}
        if len(password) < self.required_length:
            errors["PasswordTooShort"] = [
                f"Passwords must be at least {self.required_length} characters."
            ]
        if self.require_non_alphanumeric and password.isalnum():
            errors["PasswordRequiresNonAlphanumeric"] = [
                "Passwords must have at least one non alphanumeric character."
            ]
        if self.require_digit and not any(c.isdigit() for c in password):
            errors["PasswordRequiresDigit"] = ["Passwords must have at least one digit ('0'-'9')."]
        if self.require_lowercase and not any(c.islower() for c in password):
            errors["PasswordRequiresLower"] = ["Passwords must have at least one lowercase ('a'-'z')."]
        if self.require_uppercase and not any(c.isupper() for c in password):
            errors["PasswordRequiresUpper"] = ["Passwords must have at least one uppercase ('A'-'Z')."]
        return errors
