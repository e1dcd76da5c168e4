"""Configuration loading for proxy-conf."""

from proxy_conf.config.loader import load_config
from proxy_conf.config.models import ConfigFile, RenderConfig

__all__ = [
    "ConfigFile",
    "RenderConfig",
    "load_config",
]
