"""CLI entry point for proxy-conf.

Provides ``render`` and ``placeholders`` commands for producing the nginx
config at deploy time.

Usage::

    proxy-conf --help
    proxy-conf render --template nginx.conf.template --output nginx.conf
    proxy-conf render --config proxy-conf.yaml
    proxy-conf placeholders --template nginx.conf.template --json
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from proxy_conf import ui

app = typer.Typer(
    name="proxy-conf",
    help="Render the nginx proxy config from a template at deploy time.",
    no_args_is_help=True,
)


# ── render command ───────────────────────────────────────────────────────────


@app.command()
def render(
    template: Optional[str] = typer.Option(
        None,
        "--template",
        "-t",
        help="Path to the config template. Overrides the config file.",
    ),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Where to write the rendered config. Overrides the config file.",
    ),
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a proxy-conf YAML file.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug logging.",
    ),
) -> None:
    """Render the template and write the proxy config.

    Exit codes: 0 = written, 1 = render failed, 2 = usage error,
    3 = config/environment error.

    Environment variables:
      PORT    Listen port substituted for {{port}}.
    """
    from proxy_conf.workflow import run_render

    if debug:
        logging.basicConfig(level=logging.DEBUG)

    rc = run_render(template, output, config_path=config)
    raise typer.Exit(rc)


# ── placeholders command ─────────────────────────────────────────────────────


@app.command()
def placeholders(
    template: str = typer.Option(
        ...,
        "--template",
        "-t",
        help="Path to the config template.",
    ),
    json_flag: bool = typer.Option(
        False, "--json", "-j", help="Output as JSON."
    ),
) -> None:
    """List the placeholders a template would expand, without rendering it."""
    from proxy_conf.render import find_placeholders

    p = Path(template)
    if not p.is_file():
        ui.fail(f"Template not found: {template}")
        raise typer.Exit(2)

    found = find_placeholders(p.read_text(encoding="utf-8"))

    if json_flag:
        payload = [
            {"name": ph.name, "argument": ph.argument, "line": ph.line}
            for ph in found
        ]
        typer.echo(json.dumps(payload, indent=2))
        return

    ui.placeholder_table(
        [(ph.name, ph.argument or "", str(ph.line)) for ph in found]
    )


# ── Entry point ──────────────────────────────────────────────────────────────


def main() -> int:
    """Run the CLI and return an exit code."""
    try:
        app()
        return 0
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 0


if __name__ == "__main__":
    sys.exit(main())
