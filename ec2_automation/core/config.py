"""Configuration loading and validation."""

from __future__ import annotations

import copy
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from ec2_automation.constants import (
    DEFAULT_ACTION,
    DEFAULT_CONFIG_PATH,
    DEFAULT_REGION,
    DEFAULT_TAG_KEY,
    DEFAULT_TAG_VALUE,
    ENV_CONFIG_PATH,
    ENV_REGION,
    ENV_TAG_KEY,
    ENV_TAG_VALUE,
    VALID_ACTIONS,
)
from ec2_automation.core.errors import InvalidConfigurationError

logger = logging.getLogger(__name__)

ENV_OVERRIDES = {
    "region": ENV_REGION,
    "tag_key": ENV_TAG_KEY,
    "tag_value": ENV_TAG_VALUE,
}
"""Configuration fields that non-empty environment variables override."""

TEXT_FIELDS = ("action", "tag_key", "tag_value", "region")


@dataclass(frozen=True)
class Configuration:
    """Settings for a single manage invocation.

    Attributes
    ----------
    action : str
        One of ``list``, ``start`` or ``stop``
    tag_key : str
        Tag key instances must carry
    tag_value : str
        Exact value of ``tag_key``
    region : str
        AWS region to operate in
    dry_run : bool
        Report the start/stop request without sending it
    """

    action: str = DEFAULT_ACTION
    tag_key: str = DEFAULT_TAG_KEY
    tag_value: str = DEFAULT_TAG_VALUE
    region: str = DEFAULT_REGION
    dry_run: bool = False

    def validate(self) -> None:
        """Validate the action and field types.

        Raises
        ------
        InvalidConfigurationError
            If the action is not one of the valid actions or a field has the
            wrong type
        """
        if self.action not in VALID_ACTIONS:
            raise InvalidConfigurationError(
                f"Invalid action: {self.action}. "
                f"Valid actions: {', '.join(VALID_ACTIONS)}"
            )

        for field_name in ("tag_key", "tag_value", "region"):
            if not isinstance(getattr(self, field_name), str):
                raise InvalidConfigurationError(f"{field_name} must be a string")

        if not isinstance(self.dry_run, bool):
            raise InvalidConfigurationError("dry_run must be a boolean")


class ConfigLoader:
    """Build a Configuration from defaults, YAML file, flags and environment.

    Parameters
    ----------
    environ : Mapping[str, str] | None
        Environment to read overrides from. Defaults to ``os.environ``.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self.environ = os.environ if environ is None else environ
        self.BUILT_IN_DEFAULTS = {
            "action": DEFAULT_ACTION,
            "tag_key": DEFAULT_TAG_KEY,
            "tag_value": DEFAULT_TAG_VALUE,
            "region": DEFAULT_REGION,
            "dry_run": False,
        }

    def load_config(self, config_path: str | None = None) -> dict[str, Any]:
        """Load the optional YAML configuration file.

        Parameters
        ----------
        config_path : str | None
            Path to YAML config file. If None, checks EC2_AUTOMATION_CONFIG,
            then falls back to ec2-automation.yaml

        Returns
        -------
        dict[str, Any]
            Parsed configuration with interpolations resolved, or
            ``{"defaults": {}}`` when no file exists

        Raises
        ------
        InvalidConfigurationError
            If the file cannot be read or parsed
        """
        if config_path is None:
            config_path = self.environ.get(ENV_CONFIG_PATH, DEFAULT_CONFIG_PATH)

        config_file = Path(config_path)

        if not config_file.exists():
            return {"defaults": {}}

        try:
            cfg = OmegaConf.load(config_file)
        except yaml.YAMLError as e:
            logger.error("Failed to parse YAML config file %s: %s", config_file, e)
            raise InvalidConfigurationError(
                f"Invalid YAML in {config_file}", cause=e
            ) from e
        except OSError as e:
            logger.error("Failed to read config file %s: %s", config_file, e)
            raise InvalidConfigurationError(
                f"Failed to read config file {config_file}", cause=e
            ) from e

        if cfg is None:
            return {"defaults": {}}

        try:
            config = OmegaConf.to_container(cfg, resolve=True, throw_on_missing=True)
        except OmegaConfBaseException as e:
            logger.error("Failed to resolve configuration variables: %s", e)
            raise InvalidConfigurationError(
                "Configuration variable resolution error", cause=e
            ) from e

        if not isinstance(config, dict):
            raise InvalidConfigurationError(
                f"Config file {config_file} must contain a mapping"
            )

        return config

    def apply_env_overrides(self, values: dict[str, Any]) -> dict[str, Any]:
        """Override region and tag fields from non-empty environment variables.

        Environment values are applied after flags, so they take precedence
        over explicitly passed flags.

        Parameters
        ----------
        values : dict[str, Any]
            Configuration values to update in place

        Returns
        -------
        dict[str, Any]
            The updated values
        """
        for field_name, env_var in ENV_OVERRIDES.items():
            env_value = self.environ.get(env_var)
            if env_value:
                logger.debug("Overriding %s from %s", field_name, env_var)
                values[field_name] = env_value

        return values

    def build(
        self,
        overrides: Mapping[str, Any] | None = None,
        config_path: str | None = None,
    ) -> Configuration:
        """Merge all configuration layers into a Configuration.

        Layers from lowest to highest precedence: built-in defaults, YAML
        ``defaults`` section, ``overrides`` (None values skipped), environment.

        Parameters
        ----------
        overrides : Mapping[str, Any] | None
            Explicit values, typically from CLI flags
        config_path : str | None
            Optional YAML config file path

        Returns
        -------
        Configuration
            Merged, not yet validated, configuration

        Raises
        ------
        InvalidConfigurationError
            If the config file is invalid or names unknown keys
        """
        merged = copy.deepcopy(self.BUILT_IN_DEFAULTS)

        yaml_defaults = self.load_config(config_path).get("defaults") or {}
        self._merge_layer(
            merged, self._stringify_scalars(yaml_defaults), source="config file"
        )

        self._merge_layer(
            merged,
            {k: v for k, v in (overrides or {}).items() if v is not None},
            source="flags",
        )

        self.apply_env_overrides(merged)

        return Configuration(**merged)

    def _merge_layer(
        self, merged: dict[str, Any], layer: Mapping[str, Any], source: str
    ) -> None:
        if not isinstance(layer, Mapping):
            raise InvalidConfigurationError(f"Configuration from {source} must be a mapping")

        unknown = sorted(set(layer) - set(self.BUILT_IN_DEFAULTS))
        if unknown:
            raise InvalidConfigurationError(
                f"Unknown configuration keys in {source}: {', '.join(unknown)}"
            )

        merged.update(layer)

    @staticmethod
    def _stringify_scalars(layer: Any) -> Any:
        """Read YAML scalars for text fields as strings.

        Unquoted ``true`` or ``1`` in the file arrive as bool and int; tag
        filters compare strings, so ``tag_value: true`` means ``"true"``.
        """
        if not isinstance(layer, Mapping):
            return layer

        converted = dict(layer)
        for field_name in TEXT_FIELDS:
            value = converted.get(field_name)
            if isinstance(value, bool):
                converted[field_name] = str(value).lower()
            elif isinstance(value, (int, float)):
                converted[field_name] = str(value)

        return converted
