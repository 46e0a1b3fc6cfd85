"""
Name: Use Case Unit Tests

Responsibilities:
  - Verify registration, login, user lookup, publishing and listing flows
  - Use in-memory repositories and a mocked image inspector

Notes:
  - Token issuing is replaced by a deterministic fake
"""

from uuid import uuid4

import pytest

from marketplace.application.use_cases import (
    GetUserUseCase,
    ListAdsUseCase,
    LoginUserUseCase,
    PublishAdInput,
    PublishAdUseCase,
    RegisterUserUseCase,
)
from marketplace.auth_users import hash_password, verify_password
from marketplace.domain.entities import ListOptions
from marketplace.exceptions import (
    AdsNotFoundError,
    FieldValidationError,
    ImageFetchError,
    InvalidPasswordError,
    UserAlreadyExistsError,
    UserNotFoundError,
)


pytestmark = pytest.mark.unit


def _issue_token(user) -> str:
    return f"token-for-{user.username}"


def _register(user_repository) -> RegisterUserUseCase:
    return RegisterUserUseCase(
        repository=user_repository,
        password_hasher=hash_password,
        token_issuer=_issue_token,
    )


def _login(user_repository) -> LoginUserUseCase:
    return LoginUserUseCase(
        repository=user_repository,
        password_verifier=verify_password,
        token_issuer=_issue_token,
    )


def _publish(ad_repository, user_repository, image_inspector) -> PublishAdUseCase:
    return PublishAdUseCase(
        repository=ad_repository,
        get_user=GetUserUseCase(repository=user_repository),
        image_inspector=image_inspector,
    )


def _ad_input(**overrides) -> PublishAdInput:
    values = {
        "title": "Red bicycle",
        "text": "Lightly used city bike in great shape.",
        "image_url": "https://example.com/bike.png",
        "price": 120.0,
    }
    values.update(overrides)
    return PublishAdInput(**values)


class TestRegisterUser:
    def test_register_stores_hashed_password_and_returns_token(self, user_repository):
        token = _register(user_repository).execute(username="alice", password="passw0rd!")

        stored = user_repository.get_by_username("alice")
        assert token == "token-for-alice"
        assert stored is not None
        assert stored.password_hash != "passw0rd!"
        assert verify_password("passw0rd!", stored.password_hash)

    def test_duplicate_username_conflicts(self, user_repository):
        use_case = _register(user_repository)
        use_case.execute(username="alice", password="passw0rd!")

        with pytest.raises(UserAlreadyExistsError) as exc_info:
            use_case.execute(username="alice", password="other0ne!")

        assert exc_info.value.message == "user with this username already exists"

    def test_invalid_fields_are_reported_before_storage(self, user_repository):
        with pytest.raises(FieldValidationError) as exc_info:
            _register(user_repository).execute(username="al", password="short")

        assert set(exc_info.value.errors) == {"username", "password"}
        assert user_repository.get_by_username("al") is None


class TestLoginUser:
    def test_login_returns_token(self, user_repository):
        _register(user_repository).execute(username="alice", password="passw0rd!")

        token = _login(user_repository).execute(username="alice", password="passw0rd!")

        assert token == "token-for-alice"

    def test_unknown_username(self, user_repository):
        with pytest.raises(UserNotFoundError):
            _login(user_repository).execute(username="nobody", password="passw0rd!")

    def test_wrong_password(self, user_repository):
        _register(user_repository).execute(username="alice", password="passw0rd!")

        with pytest.raises(InvalidPasswordError):
            _login(user_repository).execute(username="alice", password="wr0ngpass!")


class TestGetUser:
    def test_unknown_id(self, user_repository):
        with pytest.raises(UserNotFoundError) as exc_info:
            GetUserUseCase(repository=user_repository).execute(uuid4())

        assert exc_info.value.message == "user with this id does not exist"

    def test_known_id(self, user_repository, sample_user):
        user_repository.save(sample_user)

        assert GetUserUseCase(repository=user_repository).execute(sample_user.id).username == "alice"


class TestPublishAd:
    def test_publish_snapshots_author(
        self, ad_repository, user_repository, image_inspector, sample_user
    ):
        user_repository.save(sample_user)

        ad = _publish(ad_repository, user_repository, image_inspector).execute(
            author_id=sample_user.id, data=_ad_input()
        )

        assert ad.author.id == sample_user.id
        assert ad.author.username == "alice"
        assert ad.created_at.tzinfo is not None
        image_inspector.inspect.assert_called_once_with("https://example.com/bike.png")
        assert ad_repository.find_all(ListOptions(page=1)) == [ad]

    def test_field_errors_skip_image_check_for_bad_url(
        self, ad_repository, user_repository, image_inspector, sample_user
    ):
        user_repository.save(sample_user)

        with pytest.raises(FieldValidationError) as exc_info:
            _publish(ad_repository, user_repository, image_inspector).execute(
                author_id=sample_user.id,
                data=_ad_input(title="Bike", image_url="nope"),
            )

        assert exc_info.value.errors == {
            "title": "title must be at least 5",
            "image_url": "image_url must be a valid url",
        }
        image_inspector.inspect.assert_not_called()

    def test_image_failure_is_reported_under_image_url(
        self, ad_repository, user_repository, image_inspector, sample_user
    ):
        user_repository.save(sample_user)
        image_inspector.inspect.side_effect = ImageFetchError(
            "error - image is not available: 404"
        )

        with pytest.raises(FieldValidationError) as exc_info:
            _publish(ad_repository, user_repository, image_inspector).execute(
                author_id=sample_user.id, data=_ad_input()
            )

        assert exc_info.value.errors == {"image_url": "error - image is not available: 404"}
        assert ad_repository.find_all(ListOptions(page=1)) == []

    def test_image_failure_joins_other_field_errors(
        self, ad_repository, user_repository, image_inspector, sample_user
    ):
        image_inspector.inspect.side_effect = ImageFetchError("error - image too large: 6, but need 5")

        with pytest.raises(FieldValidationError) as exc_info:
            _publish(ad_repository, user_repository, image_inspector).execute(
                author_id=sample_user.id, data=_ad_input(price=0)
            )

        assert exc_info.value.errors == {
            "price": "price is required",
            "image_url": "error - image too large: 6, but need 5",
        }

    def test_unknown_author(self, ad_repository, user_repository, image_inspector):
        with pytest.raises(UserNotFoundError):
            _publish(ad_repository, user_repository, image_inspector).execute(
                author_id=uuid4(), data=_ad_input()
            )

        assert ad_repository.find_all(ListOptions(page=1)) == []


class TestListAds:
    def test_empty_result_raises_not_found(self, ad_repository):
        with pytest.raises(AdsNotFoundError) as exc_info:
            ListAdsUseCase(repository=ad_repository).execute(ListOptions(page=1))

        assert exc_info.value.message == "ads not found"

    def test_returns_page(self, ad_repository, make_ad):
        ads = [make_ad(minutes=i) for i in range(3)]
        for ad in ads:
            ad_repository.save(ad)

        result = ListAdsUseCase(repository=ad_repository).execute(ListOptions(page=1, limit=2))

        assert result == [ads[2], ads[1]]
