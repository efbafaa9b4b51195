"""Client configuration loading."""
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from .utils.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_SOCKET_PATH = "~/.lightning/lightning-rpc"
CONFIG_SECTION = "lightning_rpc"


class ClientConfig(BaseModel):
    """Settings for connecting to lightningd."""

    socket_path: str = DEFAULT_SOCKET_PATH
    timeout: float = Field(default=30, gt=0)

    @property
    def expanded_socket_path(self) -> str:
        return str(Path(self.socket_path).expanduser())


def load_config(config_path: Optional[str] = None) -> ClientConfig:
    """Load client configuration.

    Values come from the ``lightning_rpc`` section of an optional YAML file,
    then ``LIGHTNING_RPC_PATH`` and ``LIGHTNING_RPC_TIMEOUT`` override them.

    Args:
        config_path: Path to a YAML config file (optional)

    Returns:
        Validated ClientConfig

    Raises:
        ConfigError: If the file cannot be read or holds invalid values
    """
    values: Dict[str, Any] = {}

    if config_path:
        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read config file {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {config_path} must contain a mapping")
        section = data.get(CONFIG_SECTION) or {}
        if not isinstance(section, dict):
            raise ConfigError(f"'{CONFIG_SECTION}' in {config_path} must be a mapping")
        values.update(section)
        logger.info(f"Loaded config from {config_path}")

    # Environment overrides
    socket_path = os.getenv("LIGHTNING_RPC_PATH")
    if socket_path:
        values["socket_path"] = socket_path
    timeout = os.getenv("LIGHTNING_RPC_TIMEOUT")
    if timeout:
        values["timeout"] = timeout

    try:
        return ClientConfig(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
