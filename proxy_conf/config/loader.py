"""Config file loading."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from proxy_conf.config.models import ConfigFile, RenderConfig

logger = logging.getLogger(__name__)


def load_config(path: str | Path) -> RenderConfig:
    """Load a proxy-conf YAML file and return its ``proxy_conf`` section.

    A missing file or an empty document yields default settings.

    Raises:
        pydantic.ValidationError: If the section has the wrong shape.
    """
    path = Path(path)
    raw: Dict[str, Any] = {}
    if path.exists():
        with open(path, encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
    else:
        logger.debug("Config %s not found; using defaults", path)

    return ConfigFile.model_validate(raw).proxy_conf
