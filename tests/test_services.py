"""Service-level tests for verification codes, auth and task ownership."""

from unittest.mock import patch

import pytest

from src.exceptions import (
    ConflictError,
    DeliveryError,
    InvalidCodeError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from src.models.profile import Profile
from src.models.task import Task
from src.models.user import User
from src.services.auth import AuthService
from src.services.security import PasswordHasher, TokenSigner
from src.services.task_service import TaskService
from src.services.verification import CODE_MAX, CODE_MIN, VerificationCodes


@pytest.fixture
def codes():
    return VerificationCodes()


@pytest.fixture
def auth_service(db, mailer, settings):
    # plaintext keeps these tests fast; bcrypt is exercised through the API tests
    return AuthService(db, PasswordHasher(["plaintext"]), TokenSigner(settings), mailer)


def make_user(db, email: str) -> User:
    user = User(email=email, password_hash="x", roles=["USER"])
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


class TestVerificationCodes:
    def test_issued_codes_are_six_digits(self, codes):
        for _ in range(200):
            code = codes.issue_code()
            assert CODE_MIN <= code <= CODE_MAX

    def test_check_code_coerces_strings(self, codes):
        user = User(verification_code=482913)
        assert codes.check_code(user, "482913") is True
        assert codes.check_code(user, 482913) is True
        assert codes.check_code(user, "482914") is False

    def test_check_code_without_pending_code(self, codes):
        assert codes.check_code(User(verification_code=None), "482913") is False
        assert codes.check_code(None, "482913") is False

    @pytest.mark.parametrize("submitted", [None, "", "abc", "48 29 13"])
    def test_check_code_rejects_garbage(self, codes, submitted):
        assert codes.check_code(User(verification_code=482913), submitted) is False


class TestAuthService:
    def test_register_creates_linked_profile(self, auth_service, db):
        user = auth_service.register("a@example.com", "secret123", "Ada", "Lovelace")

        assert user.profile is not None
        assert user.profile.user is user
        assert db.query(Profile).count() == 1
        assert CODE_MIN <= user.verification_code <= CODE_MAX

    def test_register_duplicate(self, auth_service, db):
        auth_service.register("a@example.com", "secret123", "Ada", "Lovelace")
        with pytest.raises(ConflictError):
            auth_service.register("a@example.com", "other123", "Ada", "Byron")
        assert db.query(User).count() == 1

    @pytest.mark.parametrize(
        "fields",
        [
            (None, "secret123", "Ada", "Lovelace"),
            ("a@example.com", "", "Ada", "Lovelace"),
            ("a@example.com", "secret123", None, "Lovelace"),
            ("a@example.com", "secret123", "Ada", None),
        ],
    )
    def test_register_requires_fields(self, auth_service, fields):
        with pytest.raises(ValidationError):
            auth_service.register(*fields)

    def test_register_race_reports_conflict(self, auth_service, db):
        """A duplicate that slips past the existence check still reads as a conflict."""
        auth_service.register("a@example.com", "secret123", "Ada", "Lovelace")
        with patch.object(auth_service, "get_user_by_email", return_value=None):
            with pytest.raises(ConflictError):
                auth_service.register("a@example.com", "other123", "Ada", "Byron")
        assert db.query(User).count() == 1
        assert db.query(Profile).count() == 1

    def test_register_delivery_failure(self, auth_service, mailer, db):
        mailer.fail = True
        with pytest.raises(DeliveryError):
            auth_service.register("a@example.com", "secret123", "Ada", "Lovelace")
        assert db.query(User).count() == 0
        assert db.query(Profile).count() == 0

    def test_login_returns_token_with_claims(self, auth_service, settings):
        user = auth_service.register("a@example.com", "secret123", "Ada", "Lovelace")
        token = auth_service.login("a@example.com", "secret123")

        payload = TokenSigner(settings).decode(token)
        assert payload["sub"] == str(user.id)
        assert payload["email"] == "a@example.com"
        assert payload["roles"] == ["USER"]
        assert auth_service.authenticate(token) is user

    def test_login_failures(self, auth_service):
        auth_service.register("a@example.com", "secret123", "Ada", "Lovelace")
        with pytest.raises(NotFoundError):
            auth_service.login("b@example.com", "secret123")
        with pytest.raises(InvalidCredentialsError):
            auth_service.login("a@example.com", "wrong")

    def test_verify_email_consumes_code(self, auth_service):
        user = auth_service.register("a@example.com", "secret123", "Ada", "Lovelace")
        code = user.verification_code

        auth_service.verify_email("a@example.com", str(code))
        assert user.verification_code is None
        with pytest.raises(InvalidCodeError):
            auth_service.verify_email("a@example.com", str(code))

    def test_forgot_password_delivery_failure_keeps_new_code(self, auth_service, mailer):
        user = auth_service.register("a@example.com", "secret123", "Ada", "Lovelace")
        mailer.fail = True
        with patch.object(auth_service.codes, "issue_code", return_value=654321):
            with pytest.raises(DeliveryError):
                auth_service.forgot_password("a@example.com")
        assert user.verification_code == 654321

    def test_change_password_requires_new_password(self, auth_service):
        user = auth_service.register("a@example.com", "secret123", "Ada", "Lovelace")
        with pytest.raises(ValidationError):
            auth_service.change_password("a@example.com", user.verification_code, "")
        assert user.verification_code is not None


class TestTaskService:
    def test_pagination(self, db, settings):
        owner = make_user(db, "owner@example.com")
        service = TaskService(db, owner, settings)
        for i in range(25):
            service.create(f"Task {i}", "desc")

        pages = [service.list(page, 10) for page in (1, 2, 3, 4)]
        assert [len(p.items) for p in pages] == [10, 10, 5, 0]
        assert all(p.total == 25 and p.pages == 3 for p in pages)

    def test_page_beyond_database_integer_range(self, db, settings):
        owner = make_user(db, "owner@example.com")
        service = TaskService(db, owner, settings)
        service.create("Only", "one")

        result = service.list(10**18, 10)
        assert result.items == []
        assert result.total == 1
        assert result.pages == 1

    def test_empty_list(self, db, settings):
        owner = make_user(db, "owner@example.com")
        result = TaskService(db, owner, settings).list()
        assert result.items == []
        assert result.total == 0
        assert result.pages == 0

    def test_ownership(self, db, settings):
        owner = make_user(db, "owner@example.com")
        intruder = make_user(db, "intruder@example.com")
        task = TaskService(db, owner, settings).create("Mine", "Hands off")

        other = TaskService(db, intruder, settings)
        for operation in (
            lambda: other.get(task.id),
            lambda: other.update(task.id, {"title": "Taken"}),
            lambda: other.patch(task.id, {"is_done": True}),
            lambda: other.complete(task.id),
            lambda: other.delete(task.id),
        ):
            with pytest.raises(NotFoundError):
                operation()

        db.refresh(task)
        assert task.title == "Mine"
        assert task.is_done is False

    def test_update_and_patch_ignore_absent_fields(self, db, settings):
        owner = make_user(db, "owner@example.com")
        service = TaskService(db, owner, settings)
        task = service.create("Title", "Description")
        created_at = task.created_at

        service.update(task.id, {"title": None, "description": None, "is_done": True})
        service.patch(task.id, {"title": "New title"})

        task = service.get(task.id)
        assert task.title == "New title"
        assert task.description == "Description"
        assert task.is_done is True
        assert task.created_at == created_at

    def test_description_length_limit(self, db, settings):
        owner = make_user(db, "owner@example.com")
        service = TaskService(db, owner, settings)
        with pytest.raises(ValidationError) as exc_info:
            service.create("Title", "x" * (settings.task_description_max_length + 1))
        assert set(exc_info.value.field_errors) == {"description"}
        assert db.query(Task).count() == 0
