"""
Name: Request Field Validation (pydantic models)

Responsibilities:
  - Declare the field constraints for registration and ad publishing
  - Translate pydantic validation errors into a field -> message map

Collaborators:
  - application.use_cases.register_user: validates credentials
  - application.use_cases.publish_ad: validates ad fields

Notes:
  - pydantic reports at most one error per field and checks every field
  - Empty strings and zero prices are reported as "required"
"""

from typing import Any

from pydantic import AnyHttpUrl, BaseModel, Field, TypeAdapter, ValidationError, field_validator
from pydantic_core import PydanticCustomError

REPORT_REQUIRED = "{field} is required"
REPORT_NEED_MORE_CHARACTERS = "{field} must be at least {min_length}"
REPORT_TOO_MANY_CHARACTERS = "{field} must be at most {max_length}"
REPORT_MUST_BE_ONLY_LETTERS = "{field} must contain only letters"
REPORT_MUST_CONTAIN_ONE_OF = "{field} must contain at least one special character from {chars}"
REPORT_NEED_URL = "{field} must be a valid url"
REPORT_NEED_POSITIVE = "{field} must be greater than 0"

PASSWORD_SPECIAL_CHARS = "!@#?$&%"
PASSWORD_DIGITS = "1234567890"

# R: pydantic error type -> message template
_ERROR_MESSAGES = {
    "missing": REPORT_REQUIRED,
    "string_too_short": REPORT_NEED_MORE_CHARACTERS,
    "string_too_long": REPORT_TOO_MANY_CHARACTERS,
    "string_pattern_mismatch": REPORT_MUST_BE_ONLY_LETTERS,
    "greater_than": REPORT_NEED_POSITIVE,
    "contains_any": REPORT_MUST_CONTAIN_ONE_OF,
    "http_url": REPORT_NEED_URL,
}

_HTTP_URL = TypeAdapter(AnyHttpUrl)


def _contains_any(value: str, chars: str) -> str:
    if not any(c in chars for c in value):
        raise PydanticCustomError(
            "contains_any",
            "must contain at least one of {chars}",
            {"chars": chars},
        )
    return value


class UserCredentials(BaseModel):
    """R: Constraints on registration credentials."""

    username: str = Field(..., min_length=3, max_length=30, pattern=r"^[A-Za-z]+$")
    password: str = Field(..., min_length=8, max_length=15)

    @field_validator("password")
    @classmethod
    def password_has_special_char(cls, v: str) -> str:
        return _contains_any(v, PASSWORD_SPECIAL_CHARS)

    @field_validator("password")
    @classmethod
    def password_has_digit(cls, v: str) -> str:
        return _contains_any(v, PASSWORD_DIGITS)


class AdFields(BaseModel):
    """R: Constraints on a published ad."""

    title: str = Field(..., min_length=5, max_length=20)
    text: str = Field(..., min_length=20, max_length=1000)
    image_url: str = Field(..., min_length=1)
    price: float = Field(..., gt=0)

    @field_validator("image_url")
    @classmethod
    def image_url_is_http(cls, v: str) -> str:
        try:
            _HTTP_URL.validate_python(v)
        except ValidationError as exc:
            raise PydanticCustomError("http_url", "must be a valid http(s) url") from exc
        return v


def _is_blank(value: Any) -> bool:
    return value is None or value == "" or value == 0


def field_errors(exc: ValidationError) -> dict[str, str]:
    """
    R: Map a pydantic ValidationError onto field -> message.

    Blank inputs report "required" whatever constraint caught them.
    """
    errors: dict[str, str] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error.get("loc") else "body"
        if field in errors:
            continue
        if _is_blank(error.get("input")):
            template = REPORT_REQUIRED
        else:
            template = _ERROR_MESSAGES.get(error["type"])
        if template is None:
            errors[field] = f"{field} {error['msg']}"
            continue
        errors[field] = template.format(field=field, **(error.get("ctx") or {}))
    return errors
