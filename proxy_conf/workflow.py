"""Deploy-time render workflow.

Steps, in order:

1. Resolve template/output paths (CLI arguments override the config file).
2. Check that every ``required_env`` variable is set.
3. Build the function table and render the template to the output path.

Any failure aborts before the output file is touched, so nginx never
starts against a half-rendered config.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional

import yaml
from pydantic import ValidationError

from proxy_conf import ui
from proxy_conf.config import RenderConfig, load_config
from proxy_conf.functions import build_function_table, check_required_env
from proxy_conf.render import MissingEnvironmentError, UnknownFunctionError, render_file

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_RENDER_FAILURE = 1
EXIT_USAGE = 2
EXIT_CONFIG = 3


def run_render(
    template_path: Optional[str | Path] = None,
    output_path: Optional[str | Path] = None,
    *,
    config_path: Optional[str | Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """Render the proxy config and return an exit code."""
    try:
        cfg = load_config(config_path) if config_path else RenderConfig()
    except (ValidationError, yaml.YAMLError) as exc:
        logger.error("Invalid config %s: %s", config_path, exc)
        ui.error_panel("Config error", f"{config_path}: {exc}")
        return EXIT_CONFIG

    template = template_path or cfg.template
    output = output_path or cfg.output
    if not template or not output:
        ui.fail("Both a template and an output path are required.")
        logger.error("Missing template or output path (template=%r, output=%r)", template, output)
        return EXIT_USAGE

    if not Path(template).is_file():
        logger.error("Template not found: %s", template)
        ui.fail(f"Template not found: {template}")
        return EXIT_USAGE

    try:
        check_required_env(cfg.required_env, environ)
        functions = build_function_table(
            environ, default_port=cfg.port, values=cfg.values
        )
    except (MissingEnvironmentError, ValueError) as exc:
        logger.error("Config check failed: %s", exc)
        ui.error_panel("Config error", str(exc))
        return EXIT_CONFIG

    ui.step(f"Rendering {template}")
    try:
        dest = render_file(template, output, functions)
    except UnknownFunctionError as exc:
        logger.error("%s", exc)
        ui.error_panel("Render failed", str(exc))
        return EXIT_RENDER_FAILURE
    except Exception as exc:
        logger.exception("Rendering %s to %s failed", template, output)
        notes = "\n".join(getattr(exc, "__notes__", []))
        ui.error_panel("Render failed", f"{type(exc).__name__}: {exc}\n{notes}".rstrip())
        return EXIT_RENDER_FAILURE

    ui.ok(f"Wrote {dest}")
    return EXIT_SUCCESS
