"""Exceptions raised while loading, reading and writing configuration."""

from __future__ import annotations

import json
from collections.abc import Iterable


def _quote(text: object) -> str:
    return json.dumps(str(text), ensure_ascii=False)


def _format_locations(locations: str | Iterable[object]) -> str:
    if isinstance(locations, str):
        return locations
    return "[" + " ".join(str(location) for location in locations) + "]"


class ConfigError(Exception):
    """Base class for every configuration error."""


class ConfigMarshalError(ConfigError):
    """The configuration could not be serialised."""

    def __init__(self, cause: object) -> None:
        self.cause = cause
        super().__init__(f"While marshaling config: {cause}")


class ConfigParseError(ConfigError):
    """A configuration document could not be parsed."""

    def __init__(self, cause: object) -> None:
        self.cause = cause
        super().__init__(f"While parsing config: {cause}")


class UnsupportedConfigError(ConfigError, ValueError):
    """The configuration type is not one of the supported formats."""

    def __init__(self, config_type: str) -> None:
        self.config_type = config_type
        super().__init__(f"Unsupported Config Type {_quote(config_type)}")


class UnsupportedRemoteProviderError(ConfigError, ValueError):
    """The remote provider name is not one of the supported providers."""

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(f"Unsupported Remote Provider Type {_quote(provider)}")


class RemoteConfigError(ConfigError):
    """Configuration could not be pulled from a remote provider."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Remote Configurations Error: {message}")


class ConfigFileNotFoundError(ConfigError, FileNotFoundError):
    """No configuration file was found in any search path."""

    def __init__(self, name: str, locations: str | Iterable[object]) -> None:
        self.name = name
        self.locations = _format_locations(locations)
        super().__init__(
            f"Config File {_quote(name)} Not Found in {_quote(self.locations)}"
        )

    def __str__(self) -> str:
        return str(self.args[0])


class ConfigFileAlreadyExistsError(ConfigError, FileExistsError):
    """A configuration file exists where a new one was to be written."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(f"Config File {_quote(filename)} Already Exists")

    def __str__(self) -> str:
        return str(self.args[0])