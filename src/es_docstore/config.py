"""Client configuration: backend kind, addresses, cloud id and API key."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from es_docstore.domain.enums import BackendName
from es_docstore.errors import InvalidConfigError, MissingOptionalDependencyError

_ENV_PREFIX = "ES_DOCSTORE_"
_YAML_MISSING_DEP_MSG = "Install the optional dependency group 'yaml' to read YAML configuration files."
_INVALID_CONFIG_MSG = "Invalid client configuration: {error}"
_UNSUPPORTED_CONFIG_FILE_MSG = "Unsupported configuration file suffix {suffix!r}; use .json, .yaml or .yml."
_ADDRESS_SCHEMES = ("http://", "https://")


def env_bool(name: str, *, default_value: bool) -> bool:
    """Read a boolean value from environment variables.

    Args:
        name (str): Environment variable name.
        default_value (bool): Fallback value when missing or invalid.

    Returns:
        bool: Parsed boolean value.

    """
    raw = os.getenv(name)
    if raw is None:
        return default_value
    normalized = raw.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default_value


class ClientConfig(BaseModel):
    """Represent connection settings for one backend cluster.

    Node selection, cloud id resolution and API key authentication are left
    to the official client of the chosen backend.

    Args:
        backend: Engine client used to reach the cluster.
        addresses: Backend base URLs.
        cloud_id: Hosted deployment id, exclusive with ``addresses``.
            Elasticsearch only.
        api_key: Encoded API key. Elasticsearch only.
        timeout_s: Request timeout in seconds.
        verify_certs: Whether TLS certificates are verified.

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    backend: BackendName = BackendName.ELASTICSEARCH
    addresses: tuple[str, ...] = ()
    cloud_id: str | None = None
    api_key: str | None = Field(default=None, repr=False)
    timeout_s: float = Field(default=30.0, gt=0)
    verify_certs: bool = True

    @field_validator("addresses")
    @classmethod
    def _check_addresses(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        cleaned = tuple(address.strip().rstrip("/") for address in value if address.strip())
        for address in cleaned:
            if not address.startswith(_ADDRESS_SCHEMES):
                msg = f"Backend address {address!r} must start with http:// or https://."
                raise ValueError(msg)
        return cleaned

    @field_validator("cloud_id", "api_key")
    @classmethod
    def _blank_as_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    @model_validator(mode="after")
    def _check_target(self) -> ClientConfig:
        if self.addresses and self.cloud_id:
            msg = "Set either addresses or cloud_id, not both."
            raise ValueError(msg)
        if not self.addresses and not self.cloud_id:
            msg = "At least one backend address or a cloud_id is required."
            raise ValueError(msg)
        if self.backend is not BackendName.ELASTICSEARCH and (self.cloud_id or self.api_key):
            msg = f"cloud_id and api_key are not supported by the '{self.backend}' backend."
            raise ValueError(msg)
        if self.backend is BackendName.HTTP and len(self.addresses) != 1:
            msg = "The 'http' backend talks to exactly one address."
            raise ValueError(msg)
        return self

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> ClientConfig:
        """Build a configuration from plain data.

        Args:
            data (dict[str, Any]): Raw settings.

        Raises:
            InvalidConfigError: If settings are missing or malformed.

        Returns:
            ClientConfig: Validated configuration.

        """
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise InvalidConfigError(_INVALID_CONFIG_MSG.format(error=exc)) from exc

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Build a configuration from ``ES_DOCSTORE_*`` environment variables.

        ``ES_DOCSTORE_ADDRESSES`` is a comma-separated list; ``ES_DOCSTORE_BACKEND``
        defaults to ``elasticsearch``.

        Raises:
            InvalidConfigError: If settings are missing or malformed.

        Returns:
            ClientConfig: Validated configuration.

        """
        data: dict[str, Any] = {
            "backend": os.getenv(f"{_ENV_PREFIX}BACKEND", BackendName.ELASTICSEARCH.value).strip().lower(),
            "addresses": tuple(os.getenv(f"{_ENV_PREFIX}ADDRESSES", "").split(",")),
            "cloud_id": os.getenv(f"{_ENV_PREFIX}CLOUD_ID"),
            "api_key": os.getenv(f"{_ENV_PREFIX}API_KEY"),
            "verify_certs": env_bool(f"{_ENV_PREFIX}VERIFY_CERTS", default_value=True),
        }
        timeout = os.getenv(f"{_ENV_PREFIX}TIMEOUT_S")
        if timeout:
            data["timeout_s"] = timeout
        return cls.from_mapping(data)

    @classmethod
    def from_file(cls, path: Path | str) -> ClientConfig:
        """Load a configuration from a JSON or YAML file.

        Args:
            path (Path | str): Configuration file path.

        Raises:
            InvalidConfigError: If the file type is unsupported or settings
                are malformed.
            MissingOptionalDependencyError: If a YAML file is given and
                `pyyaml` is not installed.

        Returns:
            ClientConfig: Validated configuration.

        """
        config_path = Path(path)
        suffix = config_path.suffix.lower()
        text = config_path.read_text(encoding="utf-8")

        if suffix == ".json":
            try:
                data = json.loads(text)
            except json.JSONDecodeError as exc:
                raise InvalidConfigError(_INVALID_CONFIG_MSG.format(error=exc)) from exc
        elif suffix in {".yaml", ".yml"}:
            try:
                from yaml import YAMLError, safe_load  # noqa: PLC0415
            except ImportError as exc:
                raise MissingOptionalDependencyError(_YAML_MISSING_DEP_MSG) from exc
            try:
                data = safe_load(text)
            except YAMLError as exc:
                raise InvalidConfigError(_INVALID_CONFIG_MSG.format(error=exc)) from exc
        else:
            raise InvalidConfigError(_UNSUPPORTED_CONFIG_FILE_MSG.format(suffix=suffix))

        if not isinstance(data, dict):
            raise InvalidConfigError(_INVALID_CONFIG_MSG.format(error="top-level value must be a mapping"))
        return cls.from_mapping(data)
