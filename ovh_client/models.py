"""
Wire models for the credential handshake and API error bodies.

All models are immutable. Field names are snake_case in Python and
camelCase on the wire.
"""

from typing import Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

ALLOWED_METHODS = ("GET", "POST", "PUT", "DELETE")


class AccessRule(BaseModel):
    """
    One permission grant: an HTTP method and a path pattern.

    The path is either exact (``/me``) or ends with a ``*`` wildcard
    (``/domain/*``, ``/*``).
    """

    model_config = ConfigDict(frozen=True)

    method: str
    path: str

    @field_validator('method')
    @classmethod
    def _check_method(cls, value: str) -> str:
        value = value.upper()
        if value not in ALLOWED_METHODS:
            raise ValueError(f"method must be one of {', '.join(ALLOWED_METHODS)}")
        return value

    @field_validator('path')
    @classmethod
    def _check_path(cls, value: str) -> str:
        if not value.startswith('/'):
            raise ValueError("path must start with '/'")
        if '*' in value[:-1]:
            raise ValueError("wildcard '*' is only allowed as the last character")
        return value


class CredentialRequest(BaseModel):
    """Scope of a new consumer key, plus where to send the user after login."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    access_rules: Tuple[AccessRule, ...] = Field(alias='accessRules')
    # Empty string keeps the user on the OVH website after validation
    redirection: str = ""


class CredentialGrant(BaseModel):
    """Answer to a consumer key request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    consumer_key: str = Field(alias='consumerKey')
    # Always "pendingValidation" at issuance
    state: str
    validation_url: str = Field(alias='validationUrl')


class ErrorBody(BaseModel):
    """Body of a non-2xx response."""

    model_config = ConfigDict(frozen=True)

    message: str
    code: Optional[Union[int, str]] = None
    tracer: Optional[str] = None
