"""Validation helpers for list-valued service settings."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from pydantic_settings import EnvSettingsSource

if TYPE_CHECKING:
    from pydantic.fields import FieldInfo


def parse_string_list(value: str | list[str], *, allow_empty: bool = False) -> list[str]:
    """Parse a string list from an environment variable or config value.

    Accepts a list of strings, a JSON array string ('["a","b"]'), or a
    comma-separated string ('a,b'). Raises ValueError for blank strings and
    malformed JSON, and for empty results unless ``allow_empty`` is set.
    """
    if isinstance(value, list):
        items = value
    else:
        stripped = value.strip()
        if not stripped:
            raise ValueError("String list value must not be empty")
        if stripped.startswith("["):
            try:
                items = json.loads(stripped)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON array: {e}") from e
            if not isinstance(items, list) or not all(isinstance(item, str) for item in items):
                raise ValueError("JSON value must be an array of strings")
        else:
            items = [part.strip() for part in stripped.split(",") if part.strip()]

    if not allow_empty and not items:
        raise ValueError("String list value must not be empty")
    return items


def parse_path_prefixes(value: str | list[str]) -> list[str]:
    """Parse URL path prefixes: each must start with '/', trailing slashes dropped."""
    prefixes = parse_string_list(value)
    normalized = []
    for prefix in prefixes:
        if not prefix.startswith("/"):
            raise ValueError(f"Path prefix must start with '/': {prefix!r}")
        normalized.append(prefix.rstrip("/") or "/")
    return normalized


_STRING_LIST_FIELDS = {"cors_origins", "protected_prefixes"}


class StringListEnvSettingsSource(EnvSettingsSource):
    """Env settings source that passes string-list fields to validators as raw strings.

    pydantic-settings JSON-decodes list-typed fields from env vars before
    validators run, which rejects the comma-separated form. This subclass
    skips that step for the fields parsed by ``parse_string_list``.
    """

    def prepare_field_value(
        self,
        field_name: str,
        field: FieldInfo,
        value: Any,  # noqa: ANN401
        value_is_complex: bool,  # noqa: FBT001
    ) -> Any:  # noqa: ANN401
        if field_name in _STRING_LIST_FIELDS and isinstance(value, str):
            return value
        return super().prepare_field_value(field_name, field, value, value_is_complex)
