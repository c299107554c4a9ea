"""
Tests for the identity provider, password policy and tokens.
"""
import pytest
from sqlalchemy import func, select

from todoboard.config import Settings
from todoboard.exceptions import AuthenticationError, IdentityError
from todoboard.identity import PasswordPolicy, TokenService, hash_password, verify_password
from todoboard.identity.tokens import ACCESS_TOKEN_TYPE, REFRESH_TOKEN_TYPE
from todoboard.models import User

VALID_PASSWORD = "Secret1!"


def count_users(session):
    return session.scalar(select(func.count()).select_from(User))


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password(VALID_PASSWORD)
        assert hashed != VALID_PASSWORD
        assert verify_password(VALID_PASSWORD, hashed)
        assert not verify_password("wrong", hashed)

    def test_verify_without_hash(self):
        assert not verify_password(VALID_PASSWORD, None)

    def test_policy_accepts_valid_password(self):
        assert PasswordPolicy().validate(VALID_PASSWORD) == {}

    @pytest.mark.parametrize("password, code", [
        ("Ab1!", "PasswordTooShort"),
        ("Secret12", "PasswordRequiresNonAlphanumeric"),
        ("Secret!!", "PasswordRequiresDigit"),
        ("SECRET1!", "PasswordRequiresLower"),
        ("secret1!", "PasswordRequiresUpper"),
    ])
    def test_policy_rejects(self, password, code):
        assert list(PasswordPolicy().validate(password)) == [code]

    def test_policy_can_be_relaxed(self):
        policy = PasswordPolicy(require_non_alphanumeric=False, require_uppercase=False)
        assert policy.validate("secret1") == {}


class TestIdentityProvider:
    def test_create_role(self, identity):
        role = identity.create_role("Editor")

        assert role.normalized_name == "EDITOR"
        assert identity.role_exists("editor")

    def test_duplicate_role(self, identity):
        identity.create_role("Editor")

        with pytest.raises(IdentityError) as exc_info:
            identity.create_role("EDITOR")
        assert "DuplicateRoleName" in exc_info.value.errors

    def test_blank_role_name(self, identity):
        with pytest.raises(IdentityError) as exc_info:
            identity.create_role("  ")
        assert "InvalidRoleName" in exc_info.value.errors

    def test_create_user(self, identity, session):
        user = identity.create_user("alice@example.com", VALID_PASSWORD)

        assert user.id is not None
        assert user.email == "alice@example.com"
        assert user.password_hash != VALID_PASSWORD
        assert user.security_stamp
        assert identity.find_user_by_name("ALICE@example.com") is user
        assert identity.get_user(user.id) is user
        assert count_users(session) == 1

    def test_create_user_collects_all_errors(self, identity, session):
        with pytest.raises(IdentityError) as exc_info:
            identity.create_user("not-an-email", "short")

        assert set(exc_info.value.errors) == {
            "InvalidEmail",
            "PasswordTooShort",
            "PasswordRequiresNonAlphanumeric",
            "PasswordRequiresDigit",
            "PasswordRequiresUpper",
        }
        assert count_users(session) == 0

    def test_duplicate_user(self, identity):
        identity.create_user("alice@example.com", VALID_PASSWORD)

        with pytest.raises(IdentityError) as exc_info:
            identity.create_user("Alice@Example.com", VALID_PASSWORD)
        assert list(exc_info.value.errors) == ["DuplicateUserName"]

    def test_add_to_roles(self, identity):
        identity.create_role("Editor")
        identity.create_role("Reviewer")
        user = identity.create_user("alice@example.com", VALID_PASSWORD)

        identity.add_to_roles(user, ["Reviewer", "Editor"])

        assert user.role_names == ["Editor", "Reviewer"]
        assert identity.is_in_role(user, "editor")

    def test_add_to_missing_role(self, identity):
        user = identity.create_user("alice@example.com", VALID_PASSWORD)

        with pytest.raises(IdentityError) as exc_info:
            identity.add_to_roles(user, ["Ghost"])
        assert "RoleNotFound" in exc_info.value.errors

    def test_add_to_role_twice(self, identity):
        identity.create_role("Editor")
        user = identity.create_user("alice@example.com", VALID_PASSWORD)
        identity.add_to_roles(user, ["Editor"])

        with pytest.raises(IdentityError) as exc_info:
            identity.add_to_roles(user, ["Editor"])
        assert "UserAlreadyInRole" in exc_info.value.errors

    def test_authenticate(self, identity):
        created = identity.create_user("alice@example.com", VALID_PASSWORD)

        assert identity.authenticate("alice@example.com", VALID_PASSWORD) is created

    @pytest.mark.parametrize("user_name, password", [
        ("alice@example.com", "Wrong1!"),
        ("bob@example.com", VALID_PASSWORD),
    ])
    def test_authenticate_rejects(self, identity, user_name, password):
        identity.create_user("alice@example.com", VALID_PASSWORD)

        with pytest.raises(AuthenticationError):
            identity.authenticate(user_name, password)


class TestTokenService:
    @pytest.fixture
    def tokens(self, settings):
        return TokenService(settings)

    @pytest.fixture
    def user(self, identity):
        identity.create_role("Editor")
        user = identity.create_user("alice@example.com", VALID_PASSWORD)
        identity.add_to_roles(user, ["Editor"])
        return user

    def test_access_token_round_trip(self, tokens, user):
        data = tokens.decode(tokens.create_access_token(user), ACCESS_TOKEN_TYPE)

        assert data.sub == str(user.id)
        assert data.typ == ACCESS_TOKEN_TYPE
        assert data.exp - data.iat == tokens.settings.access_token_expire_seconds

    def test_refresh_token_carries_stamp(self, tokens, user):
        data = tokens.decode(tokens.create_refresh_token(user), REFRESH_TOKEN_TYPE)

        assert data.stamp == user.security_stamp

    def test_wrong_token_type(self, tokens, user):
        with pytest.raises(AuthenticationError, match="Invalid token"):
            tokens.decode(tokens.create_access_token(user), REFRESH_TOKEN_TYPE)

    def test_garbage_token(self, tokens):
        with pytest.raises(AuthenticationError, match="Invalid token"):
            tokens.decode("not.a.token", ACCESS_TOKEN_TYPE)

    def test_other_secret(self, tokens, user, database_url):
        other = TokenService(Settings(database_url=database_url, jwt_secret="x" * 40))

        with pytest.raises(AuthenticationError, match="Invalid token"):
            other.decode(tokens.create_access_token(user), ACCESS_TOKEN_TYPE)

    def test_expired_token(self, settings, user):
        expired = TokenService(settings.model_copy(update={"access_token_expire_seconds": -60}))

        with pytest.raises(AuthenticationError, match="Token has expired"):
            expired.decode(expired.create_access_token(user), ACCESS_TOKEN_TYPE)
