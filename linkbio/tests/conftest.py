from __future__ import annotations

import os
from collections.abc import Iterator, Sequence

import pytest

os.environ.setdefault("APP_ENV", "test")
os.environ["ENABLE_RATE_LIMIT"] = "0"
os.environ["ENABLE_CSRF"] = "0"
os.environ["RESILIENCE_BACKOFF_BASE"] = "0"
os.environ["RESILIENCE_BACKOFF_CAP"] = "0"
os.environ["API_URL"] = "http://api.test"

from linkbio.domain.links import Link, LinkDraft, PublicProfile, PublicUser  # noqa: E402
from linkbio.domain.users import SignupResult, SignupValues, TokenPair, User  # noqa: E402
from linkbio.infrastructure.tokens import CookieTokenStore, RequestCookieJar  # noqa: E402
from linkbio.shared.config import load_config  # noqa: E402
from linkbio.shared.errors import ApiRequestError  # noqa: E402

ALICE = User(
    id="u1",
    name="Alice Doe",
    email="alice@example.com",
    avatar="https://img.example.com/a.png",
    username="alice",
)


@pytest.fixture(autouse=True)
def _fresh_config() -> Iterator[None]:
    load_config.cache_clear()
    yield
    load_config.cache_clear()


class FakeAuthApi:
    """Remote auth endpoints backed by dicts; records every call."""

    def __init__(self) -> None:
        self.users_by_token: dict[str, User] = {}
        self.refresh_tokens: dict[str, str] = {}
        self.credentials: dict[tuple[str, str], TokenPair] = {}
        self.signup_result: SignupResult | ApiRequestError | None = None
        self.calls: list[tuple[str, object]] = []

    def allow_login(self, email: str, password: str, user: User, pair: TokenPair) -> None:
        self.credentials[(email, password)] = pair
        self.users_by_token[pair.access_token] = user
        if pair.refresh_token:
            self.refresh_tokens[pair.refresh_token] = pair.access_token

    async def login(self, email: str, password: str) -> TokenPair:
        self.calls.append(("login", email))
        pair = self.credentials.get((email, password))
        if pair is None:
            raise ApiRequestError("Invalid credentials", status_code=401)
        return pair

    async def refresh(self, refresh_token: str) -> str:
        self.calls.append(("refresh", refresh_token))
        access = self.refresh_tokens.get(refresh_token)
        if access is None:
            raise ApiRequestError("Invalid refresh token", status_code=401)
        return access

    async def me(self, access_token: str) -> User | None:
        self.calls.append(("me", access_token))
        user = self.users_by_token.get(access_token)
        if user is None:
            raise ApiRequestError("Unauthorized", status_code=401)
        return user

    async def create_user(self, values: SignupValues) -> SignupResult:
        self.calls.append(("create_user", values.email))
        if isinstance(self.signup_result, ApiRequestError):
            raise self.signup_result
        if self.signup_result is None:
            return SignupResult(user_id=None, tokens=None)
        return self.signup_result


class FakeLinkApi:
    def __init__(self, links: Sequence[Link] = ()) -> None:
        self.links: list[Link] = list(links)
        self.fail_with: ApiRequestError | None = None
        self.tokens_seen: list[str | None] = []
        self.profiles: dict[str, PublicProfile] = {}
        self._seq = 100

    def _check(self, access_token: str | None) -> None:
        self.tokens_seen.append(access_token)
        if self.fail_with is not None:
            raise self.fail_with

    async def list(self, access_token: str | None) -> Sequence[Link]:
        self._check(access_token)
        return list(self.links)

    async def create(self, access_token: str | None, draft: LinkDraft) -> Link:
        self._check(access_token)
        self._seq += 1
        link = Link(id=str(self._seq), title=draft.title, url=draft.url)
        self.links.append(link)
        return link

    async def update(self, access_token: str | None, link_id: str, draft: LinkDraft) -> Link:
        self._check(access_token)
        link = Link(id=link_id, title=draft.title, url=draft.url)
        self.links = [link if item.id == link_id else item for item in self.links]
        return link

    async def delete(self, access_token: str | None, link_id: str) -> None:
        self._check(access_token)
        self.links = [item for item in self.links if item.id != link_id]

    async def public_profile(self, user_id: str) -> PublicProfile:
        profile = self.profiles.get(user_id)
        if profile is None:
            raise ApiRequestError("User not found", status_code=404)
        return profile


class RecordingNavigator:
    def __init__(self, current_path: str = "/") -> None:
        self._current_path = current_path
        self.history: list[str] = []

    @property
    def current_path(self) -> str:
        return self._current_path

    def replace(self, path: str) -> None:
        self.history.append(path)
        self._current_path = path


class RecordingNotifier:
    def __init__(self) -> None:
        self.successes: list[str] = []
        self.errors: list[str] = []

    def success(self, message: str) -> None:
        self.successes.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


def public_profile(name: str = "Alice Doe") -> PublicProfile:
    return PublicProfile(
        user=PublicUser(name=name, email="alice@example.com", avatar=""),
        links=(LinkDraft(title="Blog", url="https://blog.example.com"),),
    )


@pytest.fixture()
def auth_api() -> FakeAuthApi:
    return FakeAuthApi()


@pytest.fixture()
def link_api() -> FakeLinkApi:
    return FakeLinkApi()


@pytest.fixture()
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def cookie_tokens() -> CookieTokenStore:
    return CookieTokenStore(RequestCookieJar(), access_ttl=1800, refresh_ttl=86400)
