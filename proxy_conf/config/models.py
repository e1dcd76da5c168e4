"""Pydantic models for the proxy-conf config file.

Structure::

    proxy_conf:
      template: nginx.conf.template
      output: nginx.conf
      port: 8080
      required_env:
        - BUCKET_URL
      values:
        DOMAIN: sites.example.gov
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from proxy_conf.functions import DEFAULT_PORT


class RenderConfig(BaseModel):
    """Settings for a single render of the proxy config."""

    template: Optional[str] = None
    output: Optional[str] = None
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    required_env: List[str] = Field(default_factory=list)
    values: Dict[str, str] = Field(default_factory=dict)

    @field_validator("values", mode="before")
    @classmethod
    def _normalize_values(cls, data: Any) -> Any:
        """Drop null entries and stringify scalars (True → ``"true"``)."""
        if data is None:
            return {}
        if not isinstance(data, dict):
            return data
        out: Dict[str, str] = {}
        for key, val in data.items():
            if val is None or str(val) in ("null", "None"):
                continue
            if isinstance(val, bool):
                out[str(key)] = "true" if val else "false"
            else:
                out[str(key)] = str(val)
        return out

    @field_validator("required_env", mode="before")
    @classmethod
    def _coerce_required_env(cls, data: Any) -> Any:
        """Accept a single name or a list; None → empty list."""
        if data is None:
            return []
        if isinstance(data, str):
            return [data]
        return data


class ConfigFile(BaseModel):
    """Root model wrapping the ``proxy_conf:`` key."""

    proxy_conf: RenderConfig = Field(default_factory=RenderConfig)

    @field_validator("proxy_conf", mode="before")
    @classmethod
    def _empty_section(cls, data: Any) -> Any:
        """A bare ``proxy_conf:`` key means defaults."""
        return {} if data is None else data
