"""Read/write persisted local client configuration."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from scrambler.core.settings import PATHS
from scrambler.schemas.config import ClientConfig

logger = logging.getLogger(__name__)


def load_config(path: Path = PATHS.config_path) -> ClientConfig:
    if not path.exists():
        return ClientConfig()
    data = json.loads(path.read_text(encoding="utf-8"))
    return ClientConfig.model_validate(data)


def save_config(config: ClientConfig, path: Path = PATHS.config_path) -> ClientConfig:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(config.model_dump(), ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    logger.debug(f"saved client config to {path}")
    return config


def ensure_config(path: Path = PATHS.config_path) -> ClientConfig:
    """Load the config, writing defaults first when no file exists yet."""
    if not path.exists():
        return save_config(ClientConfig(), path)
    return load_config(path)
