"""Configuration models for the DataZone demo client."""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigurationError

CONFIG_PATH_ENV = "DATAZONE_DEMO_CONFIG"

# Environment variables overlaid on top of the YAML file
ENV_OVERRIDES = {
    "domain_identifier": "DATAZONE_DOMAIN_IDENTIFIER",
    "aws_region": "AWS_REGION",
    "aws_profile": "AWS_PROFILE",
    "endpoint_url": "DATAZONE_ENDPOINT_URL",
}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    redaction: bool = False
    level: str = "INFO"


class DemoConfig(BaseModel):
    """Identifiers used by the canned demo calls."""

    lineage_event_id: str = "3jsqbte83xrjqa"
    project_name: str = "producer-project"
    asset_name: str = "TestDepartmentAsset"
    asset_type: str = "JsonAssetType"
    asset_id: str = "bb6qulorb02wiq"
    form_name: str = "DepartmentMetadataForm"
    form_type: str = "DepartmentMetaDataForm"
    glossary_terms: List[str] = Field(default_factory=list)


class DataZoneConfig(BaseModel):
    """Connection settings for a single DataZone domain."""

    domain_identifier: str
    aws_region: Optional[str] = None
    aws_profile: Optional[str] = None
    endpoint_url: Optional[str] = None
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    demo: DemoConfig = Field(default_factory=DemoConfig)

    @field_validator("domain_identifier")
    @classmethod
    def domain_identifier_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("domain_identifier must not be empty")
        return value

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "DataZoneConfig":
        """Load configuration from a YAML file.

        Args:
            path: Path to YAML file

        Returns:
            DataZoneConfig instance

        Raises:
            ConfigurationError: If the file cannot be read, parsed or validated
        """
        return cls.from_dict(_read_yaml(Path(path)))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DataZoneConfig":
        """Build configuration from a mapping, converting validation failures."""
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid DataZone configuration: {e}",
                details={"errors": e.errors(include_url=False)},
            ) from e


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigurationError(
            f"Config file not found: {path}", details={"path": str(path)}
        )

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse config YAML: {path}", details={"path": str(path)}
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file must contain a mapping: {path}", details={"path": str(path)}
        )
    return data


def load_config(
    path: Optional[Union[str, Path]] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> DataZoneConfig:
    """Resolve configuration from file, environment and explicit overrides.

    Precedence, lowest first: YAML file, environment variables, ``overrides``.
    ``None`` values in ``overrides`` are ignored.

    Args:
        path: Optional YAML path (falls back to ``DATAZONE_DEMO_CONFIG``)
        overrides: Values taken from the command line

    Returns:
        DataZoneConfig instance

    Raises:
        ConfigurationError: If no domain identifier can be resolved or the
            resulting configuration is invalid
    """
    candidate = path or os.getenv(CONFIG_PATH_ENV)
    data: Dict[str, Any] = _read_yaml(Path(candidate)) if candidate else {}

    for field_name, env_var in ENV_OVERRIDES.items():
        env_value = os.getenv(env_var)
        if env_value:
            data[field_name] = env_value

    for field_name, value in (overrides or {}).items():
        if value is not None:
            data[field_name] = value

    if not data.get("domain_identifier"):
        raise ConfigurationError(
            "DataZone domain identifier is not configured. Set domain_identifier in "
            f"the config file, {ENV_OVERRIDES['domain_identifier']}, or --domain-id."
        )

    return DataZoneConfig.from_dict(data)
