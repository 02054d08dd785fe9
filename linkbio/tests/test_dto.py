from __future__ import annotations

import pytest
from pydantic import ValidationError

from linkbio.interfaces.http.dto import LinkForm, SigninForm, SignupForm
from linkbio.shared.errors.validation import field_messages
from linkbio.shared.errors.validation_types import ValidationErrorType

VALID_SIGNUP = {
    "name": "Alice Doe",
    "email": "alice@example.com",
    "password": "secret1",
    "username": "alice",
    "avatar": "https://img.example.com/a.png",
}


def _error_types(exc: ValidationError) -> dict[str, str]:
    return {str(error["loc"][0]): error["type"] for error in exc.errors()}


def test_signin_accepts_valid_credentials() -> None:
    form = SigninForm.model_validate({"email": " a@b.com ", "password": "secret1"})

    assert form.email == "a@b.com"
    assert form.password == "secret1"


def test_signin_rejects_bad_email_and_short_password() -> None:
    with pytest.raises(ValidationError) as info:
        SigninForm.model_validate({"email": "not-an-email", "password": "12345"})

    assert _error_types(info.value) == {
        "email": ValidationErrorType.EMAIL_INVALID,
        "password": ValidationErrorType.TOO_SHORT,
    }


def test_signup_reports_every_invalid_field() -> None:
    with pytest.raises(ValidationError) as info:
        SignupForm.model_validate(
            {"name": "A", "email": "x", "password": "1", "username": "", "avatar": "nope"}
        )

    types = _error_types(info.value)
    assert set(types) == {"name", "email", "password", "username", "avatar"}
    assert types["username"] == ValidationErrorType.MISSING
    assert types["avatar"] == ValidationErrorType.URL_INVALID
    assert field_messages(info.value)["name"] == "Name must be at least 2 characters long"


def test_signup_builds_values() -> None:
    values = SignupForm.model_validate(VALID_SIGNUP).to_values()

    assert values.to_payload()["avatar"] == "https://img.example.com/a.png"


def test_link_form_keeps_url_as_typed() -> None:
    form = LinkForm.model_validate(
        {
            "title": "Blog",
            "url": "https://blog.example.com",
            "editing_index": "",
            "editing_id": "",
        }
    )

    assert form.editing_index is None
    assert form.editing_id is None
    assert form.to_draft().url == "https://blog.example.com"


def test_link_form_requires_title_and_url() -> None:
    with pytest.raises(ValidationError) as info:
        LinkForm.model_validate({"title": "  ", "url": "ftp//broken"})

    assert _error_types(info.value) == {
        "title": ValidationErrorType.MISSING,
        "url": ValidationErrorType.URL_INVALID,
    }


def test_link_form_parses_editing_index() -> None:
    form = LinkForm.model_validate(
        {
            "title": "Blog",
            "url": "https://blog.example.com",
            "editing_index": "2",
            "editing_id": "7",
        }
    )

    assert form.editing_index == 2
    assert form.editing_id == "7"
