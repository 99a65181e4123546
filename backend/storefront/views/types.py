from pydantic import BaseModel, ConfigDict, Field


class _AuthBody(BaseModel):
    # Unknown keys and non-string values fail the parse; absent or empty
    # fields are left for the auth service's required-field check.
    model_config = ConfigDict(extra="forbid", populate_by_name=True, strict=True)


class RegisterRequest(_AuthBody):
    email: str | None = None
    password: str | None = None
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")


class LoginRequest(_AuthBody):
    email: str | None = None
    password: str | None = None
