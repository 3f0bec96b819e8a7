import dataclasses
import logging
import os
import typing

from .exceptions import SoldoSDKError

ENVIRONMENT_NAMES = ("demo", "live")

# dotted keys accepted for compatibility with older configuration files
LEGACY_KEYS = {
    "log.enabled": "log_enabled",
    "log.file": "log_file",
    "log.level": "log_level",
}


def parse_bool(value: typing.Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


@dataclasses.dataclass
class Config:
    """
    SDK configuration.

    ``client_id`` and ``client_secret`` are required; everything else has a
    default.
    """

    client_id: str
    client_secret: str
    environment: str = "demo"
    log_enabled: bool = False
    log_file: typing.Optional[str] = None
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.environment not in ENVIRONMENT_NAMES:
            raise SoldoSDKError(
                f'Invalid "environment" {self.environment!r}, expected "demo" or "live"'
            )
        self.log_level = str(self.log_level).upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise SoldoSDKError(f'Invalid "log_level" {self.log_level!r}')
        self.log_enabled = parse_bool(self.log_enabled)

    @classmethod
    def from_mapping(cls, mapping: typing.Mapping[str, typing.Any]) -> "Config":
        options = {LEGACY_KEYS.get(key, key): value for key, value in mapping.items()}

        for required in ("client_id", "client_secret"):
            if required not in options:
                raise SoldoSDKError(f'Required "{required}" key is missing in config')

        known = {field.name for field in dataclasses.fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise SoldoSDKError(f"Unknown config keys: {', '.join(unknown)}")

        return cls(**options)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from ``SOLDO_*`` environment variables."""
        mapping: typing.Dict[str, typing.Any] = {}
        for name in ("client_id", "client_secret", "environment", "log_enabled", "log_file", "log_level"):
            value = os.getenv(f"SOLDO_{name.upper()}")
            if value is not None:
                mapping[name] = value
        return cls.from_mapping(mapping)
