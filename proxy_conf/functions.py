"""Standard template functions supplied by the deploy tooling.

The renderer never reads the process environment itself.  Everything it
substitutes comes through the table built here:

- ``{{port}}`` → ``$PORT`` (or the configured default listen port)
- ``{{env "NAME"}}`` → ``$NAME``; unset variables are an error
- one zero-argument function per entry in the config ``values`` map
"""

from __future__ import annotations

import logging
import os
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from proxy_conf.render.errors import MissingEnvironmentError
from proxy_conf.render.renderer import NAME_PATTERN

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080

BUILTIN_FUNCTIONS = frozenset({"port", "env"})


def build_function_table(
    environ: Optional[Mapping[str, str]] = None,
    *,
    default_port: int = DEFAULT_PORT,
    values: Optional[Mapping[str, str]] = None,
) -> Dict[str, Callable[..., Any]]:
    """Return the name → callable table used to render proxy templates.

    Args:
        environ: Environment to read from.  Defaults to a snapshot of
            :data:`os.environ` taken now.
        default_port: Value of ``{{port}}`` when ``PORT`` is unset or empty.
        values: Extra literal placeholders (name → string).

    Raises:
        ValueError: If a *values* key shadows a built-in function or is not
            a valid placeholder name.
    """
    env_map: Mapping[str, str] = dict(os.environ) if environ is None else environ

    def port() -> Any:
        return env_map.get("PORT") or default_port

    def env(name: str) -> str:
        if name not in env_map:
            raise MissingEnvironmentError([name])
        return env_map[name]

    table: Dict[str, Callable[..., Any]] = {"port": port, "env": env}

    for key, literal in (values or {}).items():
        if key in BUILTIN_FUNCTIONS:
            raise ValueError(f"Config value '{key}' shadows built-in function")
        if not NAME_PATTERN.fullmatch(key):
            raise ValueError(f"Invalid placeholder name in config values: {key!r}")
        table[key] = _constant(literal)

    logger.debug("Function table: %s", ", ".join(sorted(table)))
    return table


def check_required_env(
    names: Iterable[str],
    environ: Optional[Mapping[str, str]] = None,
) -> None:
    """Raise :class:`MissingEnvironmentError` if any of *names* is unset or empty."""
    env_map = os.environ if environ is None else environ
    missing = sorted({n for n in names if not env_map.get(n)})
    if missing:
        raise MissingEnvironmentError(missing)


def _constant(value: str) -> Callable[[], str]:
    def _fn() -> str:
        return value

    return _fn
