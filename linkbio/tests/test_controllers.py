from __future__ import annotations

import pytest
from conftest import ALICE, FakeAuthApi, FakeLinkApi, public_profile
from flask import Flask
from flask.testing import FlaskClient

from linkbio.app import create_app
from linkbio.application.session.controller import SIGNUP_SIGN_IN
from linkbio.domain.links import Link
from linkbio.domain.users import SignupResult, TokenPair
from linkbio.infrastructure.container import Container
from linkbio.infrastructure.tokens import (ACCESS_TOKEN_COOKIE,
                                           REFRESH_TOKEN_COOKIE)
from linkbio.interfaces.http.controllers.links_controller import LINK_MISSING
from linkbio.shared.config import load_config

LINKS = (
    Link(id="1", title="Blog", url="https://blog.example.com"),
    Link(id="2", title="Shop", url="https://shop.example.com"),
)


@pytest.fixture()
def apis() -> tuple[FakeAuthApi, FakeLinkApi]:
    auth_api = FakeAuthApi()
    auth_api.allow_login("alice@example.com", "secret1", ALICE, TokenPair("a1", "r1"))
    return auth_api, FakeLinkApi(LINKS)


def _app(apis: tuple[FakeAuthApi, FakeLinkApi]) -> Flask:
    auth_api, link_api = apis
    app = create_app(Container(load_config(), auth_api=auth_api, link_api=link_api))
    app.config.update(TESTING=True)
    return app


@pytest.fixture()
def client(apis: tuple[FakeAuthApi, FakeLinkApi]) -> FlaskClient:
    return _app(apis).test_client()


def _set_cookies(response) -> dict[str, str]:
    cookies: dict[str, str] = {}
    for header in response.headers.getlist("Set-Cookie"):
        name, _, rest = header.partition("=")
        cookies[name] = rest.split(";", 1)[0]
    return cookies


def test_landing_renders_for_anonymous_visitor(
    client: FlaskClient, apis: tuple[FakeAuthApi, FakeLinkApi]
) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert b"Sign in" in response.data
    assert apis[0].calls == []
    assert response.headers["X-Frame-Options"] == "DENY"


def test_landing_redirects_restored_session_to_dashboard(client: FlaskClient) -> None:
    client.set_cookie(REFRESH_TOKEN_COOKIE, "r1")

    response = client.get("/")

    assert response.status_code == 302
    assert response.headers["Location"] == "/dash"


def test_login_with_invalid_form_never_calls_api(
    client: FlaskClient, apis: tuple[FakeAuthApi, FakeLinkApi]
) -> None:
    response = client.post("/auth/login", data={"email": "nope", "password": "1"})

    assert response.status_code == 422
    assert b"Invalid e-mail address" in response.data
    assert apis[0].calls == []


def test_login_sets_token_cookies_and_redirects(client: FlaskClient) -> None:
    response = client.post(
        "/auth/login", data={"email": "alice@example.com", "password": "secret1"}
    )

    assert response.status_code == 302
    assert response.headers["Location"] == "/dash"
    cookies = _set_cookies(response)
    assert cookies[ACCESS_TOKEN_COOKIE] == "a1"
    assert cookies[REFRESH_TOKEN_COOKIE] == "r1"


def test_login_rejected_rerenders_with_message(client: FlaskClient) -> None:
    response = client.post(
        "/auth/login", data={"email": "alice@example.com", "password": "wrong-one"}
    )

    assert response.status_code == 401
    assert b"Invalid credentials" in response.data
    assert ACCESS_TOKEN_COOKIE not in _set_cookies(response)


def test_signup_without_id_stays_on_landing(
    client: FlaskClient, apis: tuple[FakeAuthApi, FakeLinkApi]
) -> None:
    response = client.post(
        "/auth/signup",
        data={
            "name": "Alice Doe",
            "email": "alice@example.com",
            "password": "secret1",
            "username": "alice",
            "avatar": "https://img.example.com/a.png",
        },
    )

    assert response.status_code == 400
    assert b"Could not create the user" in response.data
    assert ("create_user", "alice@example.com") in apis[0].calls


def test_signup_created_without_tokens_redirects_to_sign_in(
    client: FlaskClient, apis: tuple[FakeAuthApi, FakeLinkApi]
) -> None:
    apis[0].signup_result = SignupResult(user_id="u1", tokens=None)

    response = client.post(
        "/auth/signup",
        data={
            "name": "Alice Doe",
            "email": "alice@example.com",
            "password": "secret1",
            "username": "alice",
            "avatar": "https://img.example.com/a.png",
        },
    )

    assert response.status_code == 302
    assert response.headers["Location"] == "/"
    assert ACCESS_TOKEN_COOKIE not in _set_cookies(response)
    with client.session_transaction() as flask_session:
        assert ("success", SIGNUP_SIGN_IN) in flask_session["_flashes"]


def test_dashboard_requires_session(client: FlaskClient) -> None:
    response = client.get("/dash")

    assert response.status_code == 302
    assert response.headers["Location"] == "/"


def test_dashboard_lists_links_and_selects_edit(client: FlaskClient) -> None:
    client.set_cookie(REFRESH_TOKEN_COOKIE, "r1")

    response = client.get("/dash?edit=1")

    assert response.status_code == 200
    assert b"Blog" in response.data
    assert b'name="editing_index" value="1"' in response.data
    assert b'name="editing_id" value="2"' in response.data
    assert b'value="https://shop.example.com"' in response.data


def test_create_link_round_trip(
    client: FlaskClient, apis: tuple[FakeAuthApi, FakeLinkApi]
) -> None:
    client.set_cookie(REFRESH_TOKEN_COOKIE, "r1")

    response = client.post(
        "/dash/links", data={"title": "Docs", "url": "https://docs.example.com"}
    )

    assert response.status_code == 302
    assert response.headers["Location"] == "/dash"
    assert apis[1].links[-1].title == "Docs"
    assert apis[1].tokens_seen[-1] == "a1"


def test_update_link_by_editing_index(
    client: FlaskClient, apis: tuple[FakeAuthApi, FakeLinkApi]
) -> None:
    client.set_cookie(REFRESH_TOKEN_COOKIE, "r1")

    client.post(
        "/dash/links",
        data={
            "title": "Store",
            "url": "https://store.example.com",
            "editing_index": "1",
            "editing_id": "2",
        },
    )

    assert [link.title for link in apis[1].links] == ["Blog", "Store"]


def test_update_after_list_shift_does_not_touch_other_record(
    client: FlaskClient, apis: tuple[FakeAuthApi, FakeLinkApi]
) -> None:
    link_api = apis[1]
    link_api.links.append(Link(id="3", title="Docs", url="https://docs.example.com"))
    client.set_cookie(REFRESH_TOKEN_COOKIE, "r1")
    page = client.get("/dash?edit=1")
    assert b'name="editing_id" value="2"' in page.data

    # removed from another tab while the form was open
    link_api.links = [link for link in link_api.links if link.id != "1"]
    response = client.post(
        "/dash/links",
        data={
            "title": "Store",
            "url": "https://store.example.com",
            "editing_index": "1",
            "editing_id": "2",
        },
    )

    assert response.status_code == 302
    assert response.headers["Location"] == "/dash"
    assert [(link.id, link.title) for link in link_api.links] == [("2", "Shop"), ("3", "Docs")]
    with client.session_transaction() as flask_session:
        assert ("error", LINK_MISSING) in flask_session["_flashes"]


def test_update_without_editing_id_is_refused(
    client: FlaskClient, apis: tuple[FakeAuthApi, FakeLinkApi]
) -> None:
    client.set_cookie(REFRESH_TOKEN_COOKIE, "r1")

    client.post(
        "/dash/links",
        data={"title": "Store", "url": "https://store.example.com", "editing_index": "1"},
    )

    assert [link.title for link in apis[1].links] == ["Blog", "Shop"]


def test_dashboard_shows_preview_of_links(client: FlaskClient) -> None:
    client.set_cookie(REFRESH_TOKEN_COOKIE, "r1")

    response = client.get("/dash")

    assert b"Preview" in response.data
    assert response.data.count(b'class="button" href="https://shop.example.com"') == 1


def test_dashboard_without_links_has_no_preview(
    client: FlaskClient, apis: tuple[FakeAuthApi, FakeLinkApi]
) -> None:
    apis[1].links = []
    client.set_cookie(REFRESH_TOKEN_COOKIE, "r1")

    response = client.get("/dash")

    assert b"No links yet." in response.data
    assert b"Preview" not in response.data


def test_invalid_link_form_returns_422(
    client: FlaskClient, apis: tuple[FakeAuthApi, FakeLinkApi]
) -> None:
    client.set_cookie(REFRESH_TOKEN_COOKIE, "r1")

    response = client.post("/dash/links", data={"title": "", "url": "not a url"})

    assert response.status_code == 422
    assert b"Invalid URL" in response.data
    assert len(apis[1].links) == len(LINKS)


def test_delete_link(client: FlaskClient, apis: tuple[FakeAuthApi, FakeLinkApi]) -> None:
    client.set_cookie(REFRESH_TOKEN_COOKIE, "r1")

    response = client.post("/dash/links/1/delete")

    assert response.status_code == 302
    assert [link.id for link in apis[1].links] == ["2"]


def test_logout_expires_cookies(client: FlaskClient) -> None:
    client.set_cookie(REFRESH_TOKEN_COOKIE, "r1")

    response = client.post("/auth/logout")

    assert response.status_code == 302
    assert response.headers["Location"] == "/"
    cookies = _set_cookies(response)
    assert cookies[ACCESS_TOKEN_COOKIE] == ""
    assert cookies[REFRESH_TOKEN_COOKIE] == ""


def test_public_profile_renders_without_session(
    client: FlaskClient, apis: tuple[FakeAuthApi, FakeLinkApi]
) -> None:
    apis[1].profiles["42"] = public_profile()

    response = client.get("/user/42")

    assert response.status_code == 200
    assert b"https://blog.example.com" in response.data
    assert b"AL" in response.data
    assert apis[0].calls == []


def test_public_profile_failure_redirects_home(client: FlaskClient) -> None:
    response = client.get("/user/missing")

    assert response.status_code == 302
    assert response.headers["Location"] == "/"


def test_health(client: FlaskClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_memory_strategy_keeps_access_token_off_cookies(
    apis: tuple[FakeAuthApi, FakeLinkApi], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("TOKEN_STRATEGY", "memory")
    load_config.cache_clear()

    with _app(apis).test_client() as client:
        response = client.post(
            "/auth/login", data={"email": "alice@example.com", "password": "secret1"}
        )

    cookies = _set_cookies(response)
    assert response.status_code == 302
    assert ACCESS_TOKEN_COOKIE not in cookies
    assert cookies[REFRESH_TOKEN_COOKIE] == "r1"


def test_csrf_rejects_form_without_token(
    apis: tuple[FakeAuthApi, FakeLinkApi], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("ENABLE_CSRF", "1")
    load_config.cache_clear()

    with _app(apis).test_client() as client:
        rejected = client.post(
            "/auth/login", data={"email": "alice@example.com", "password": "secret1"}
        )
        client.set_cookie("csrf_token", "t0k3n")
        accepted = client.post(
            "/auth/login",
            data={"email": "alice@example.com", "password": "secret1", "csrf_token": "t0k3n"},
        )

    assert rejected.status_code == 403
    assert accepted.status_code == 302
    assert apis[0].calls.count(("login", "alice@example.com")) == 1


def test_json_login_validation_error_is_structured(
    client: FlaskClient, apis: tuple[FakeAuthApi, FakeLinkApi]
) -> None:
    response = client.post("/auth/login", json={"email": "alice@example.com"})

    assert response.status_code == 422
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert payload["context"]["fields"] == ["password"]
    assert apis[0].calls == []


def test_json_login_rejection_is_structured(client: FlaskClient) -> None:
    response = client.post(
        "/auth/login", json={"email": "alice@example.com", "password": "wrong-one"}
    )

    assert response.status_code == 401
    payload = response.get_json()
    assert payload["error"] == "api_request_failed"
    assert payload["context"]["message"] == "Invalid credentials"
    assert ACCESS_TOKEN_COOKIE not in _set_cookies(response)


def test_responses_carry_request_id(client: FlaskClient) -> None:
    response = client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


def test_unknown_page_renders_error_template(client: FlaskClient) -> None:
    response = client.get("/nowhere")

    assert response.status_code == 404
    assert b"Not Found" in response.data
