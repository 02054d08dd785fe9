# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from linkbio.domain.users import SignupValues

from ._fields import require_email, require_min_length, require_url


class SigninForm(BaseModel):
    model_config = ConfigDict(validate_default=True)

    email: str = ""
    password: str = ""

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return require_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        # passwords are sent untrimmed
        require_min_length(value, 6, "Password")
        return value


class SignupForm(BaseModel):
    model_config = ConfigDict(validate_default=True)

    name: str = ""
    email: str = ""
    password: str = ""
    username: str = ""
    avatar: str = ""

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return require_min_length(value, 2, "Name")

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return require_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        require_min_length(value, 6, "Password")
        return value

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        return require_min_length(value, 2, "Username")

    @field_validator("avatar")
    @classmethod
    def validate_avatar(cls, value: str) -> str:
        return require_url(value)

    def to_values(self) -> SignupValues:
        return SignupValues(
            name=self.name,
            email=self.email,
            password=self.password,
            username=self.username,
            avatar=self.avatar,
        )
