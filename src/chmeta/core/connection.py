"""
Connection configuration and its persistent attribute store.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Final, Mapping

from ..security.dsns import DSNConfig, parse_dsn
from ..utils.messages import format_message
from .errors import AdapterConfigurationError, UnsupportedAccessTypeError

STRICT_BIGNUMBER_INTERPRETATION: Final[str] = "STRICT_NUMBER_38_INTERPRETATION"
SUPPORTS_BOOLEAN_DATA_TYPE: Final[str] = "SUPPORTS_BOOLEAN_DATA_TYPE"

ATTRIBUTE_PREFIX: Final[str] = "attribute."


class AccessType(Enum):
    NATIVE = "native"
    ODBC = "odbc"
    JNDI = "jndi"

    @classmethod
    def parse(cls, value: "AccessType | str") -> "AccessType":
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        for member in cls:
            if normalized in (member.value, member.name.lower()):
                return member
        raise UnsupportedAccessTypeError(
            format_message("unsupported_access_type", access_type=value), value
        )


_TRUE_VALUES = {"1", "true", "yes", "on", "y"}
_FALSE_VALUES = {"0", "false", "no", "off", "n"}
_INT_OPTIONS = {"connect_timeout", "send_receive_timeout", "query_limit"}


def _parse_bool(value: str, *, key: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise AdapterConfigurationError(f"Invalid boolean value for '{key}': {value!r}")


def _parse_int(value: str, *, key: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise AdapterConfigurationError(f"Invalid integer value for '{key}': {value!r}") from exc


def _pop_bool(query: dict[str, str], key: str) -> bool | None:
    if key not in query:
        return None
    return _parse_bool(query.pop(key), key=key)


def _parse_option_values(query: dict[str, str]) -> dict[str, Any]:
    options: dict[str, Any] = {}
    for key, value in query.items():
        if key in _INT_OPTIONS:
            options[key] = _parse_int(value, key=key)
        else:
            options[key] = value
    return options


@dataclass
class ConnectionConfig:
    """
    Normalized connection parameters plus the per-connection attribute store.

    ``attributes`` is the key/value bag persisted with the configuration;
    flags are stored as ``"Y"``/``"N"`` strings.
    """

    host: str | None = None
    port: int | str | None = None
    database: str | None = None
    access_type: AccessType = AccessType.NATIVE
    username: str | None = None
    password: str | None = None
    options: dict[str, Any] | None = None
    attributes: dict[str, str] = field(default_factory=dict)
    dsn: DSNConfig | None = None
    source: str | None = None

    def __post_init__(self) -> None:
        self.access_type = AccessType.parse(self.access_type)

    @classmethod
    def from_dsn(cls, dsn: str, **kwargs: Any) -> "ConnectionConfig":
        """
        Build a connection config by parsing the DSN string.
        """

        try:
            parsed = parse_dsn(dsn)
        except ValueError as exc:
            raise AdapterConfigurationError(f"Invalid DSN: {exc}") from exc
        query = dict(parsed.query)

        parsed_access = query.pop("access_type", None)
        strict_bignumber = _pop_bool(query, "strict_bignumber")
        supports_boolean = _pop_bool(query, "supports_boolean")
        options_from_dsn = _parse_option_values(query)

        options = dict(options_from_dsn)
        options.update(kwargs.pop("options", None) or {})

        attributes: dict[str, str] = {}
        if strict_bignumber is not None:
            attributes[STRICT_BIGNUMBER_INTERPRETATION] = "Y" if strict_bignumber else "N"
        if supports_boolean is not None:
            attributes[SUPPORTS_BOOLEAN_DATA_TYPE] = "Y" if supports_boolean else "N"
        attributes.update(kwargs.pop("attributes", None) or {})

        access_type = kwargs.pop("access_type", parsed_access or AccessType.NATIVE)

        return cls(
            host=kwargs.pop("host", parsed.host),
            port=kwargs.pop("port", parsed.port),
            database=kwargs.pop("database", parsed.database),
            username=kwargs.pop("username", parsed.username),
            password=kwargs.pop("password", parsed.password),
            access_type=access_type,
            options=options or None,
            attributes=attributes,
            dsn=parsed,
            **kwargs,
        )

    @classmethod
    def from_env(cls, env_var: str, **kwargs: Any) -> "ConnectionConfig":
        """
        Build a config from an environment variable containing a DSN.
        """

        value = os.getenv(env_var)
        if not value:
            raise AdapterConfigurationError(f"Environment variable {env_var} is not set")
        return cls.from_dsn(value, source=env_var, **kwargs)

    @classmethod
    def from_properties(cls, properties: Mapping[str, str]) -> "ConnectionConfig":
        """
        Rebuild a config from the flat property bag written by :meth:`to_properties`.
        """

        attributes = {
            key[len(ATTRIBUTE_PREFIX) :]: value
            for key, value in properties.items()
            if key.startswith(ATTRIBUTE_PREFIX)
        }
        port = properties.get("port")
        return cls(
            host=properties.get("host"),
            port=_parse_int(port, key="port") if port else None,
            database=properties.get("database"),
            access_type=properties.get("access_type", AccessType.NATIVE.value),
            username=properties.get("username"),
            password=properties.get("password"),
            attributes=attributes,
        )

    def to_properties(self, *, include_credentials: bool = False) -> dict[str, str]:
        properties: dict[str, str] = {"access_type": self.access_type.value}
        for key in ("host", "port", "database", "username"):
            value = getattr(self, key)
            if value not in (None, ""):
                properties[key] = str(value)
        if include_credentials and self.password:
            properties["password"] = self.password
        for key, value in self.attributes.items():
            properties[f"{ATTRIBUTE_PREFIX}{key}"] = value
        return properties

    def get_attribute(self, key: str, default: str | None = None) -> str | None:
        return self.attributes.get(key, default)

    def set_attribute(self, key: str, value: str) -> None:
        self.attributes[key] = value

    def redacted_dsn(self) -> str:
        """
        Return a DSN safe for logging (credentials removed).
        """

        if self.dsn:
            return self.dsn.redacted()
        user = f"{self.username}@" if self.username else ""
        port = f":{self.port}" if self.port not in (None, "") else ""
        return f"clickhouse://{user}{self.host or ''}{port}/{self.database or ''}"

    def descriptive_label(self) -> str:
        """
        Describe the config source for diagnostics.
        """

        redacted = self.redacted_dsn()
        if self.source:
            return f"{self.source} ({redacted})"
        return redacted
