"""nginx config template renderer: strips ``daemon off;`` and expands ``{{...}}``.

Rendering runs in two stages over the raw template text:

1. **Directive stripping**: every literal ``daemon off;`` is removed.
   Surrounding characters on the line are left alone, so a
   whitespace-only line may remain where the directive sat.
2. **Placeholder substitution**: ``{{name}}`` and ``{{name "arg"}}`` spans
   are replaced with the result of calling ``functions[name]()`` or
   ``functions[name]("arg")``.

Substitution is a single left-to-right pass.  Substituted text is never
re-scanned, and stripping is never re-applied to it.  Anything that
looks like a placeholder but does not match the grammar is emitted as-is.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional

from proxy_conf.render.errors import UnknownFunctionError

logger = logging.getLogger(__name__)

# ── constants ────────────────────────────────────────────────────────

#: Directive nginx must not see when the platform supervises the process.
STRIPPED_DIRECTIVE = "daemon off;"

#: Placeholder and config value names.
NAME_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

#: ``{{ name }}`` or ``{{ name "argument" }}``; ws is space or tab only.
PLACEHOLDER_PATTERN = re.compile(
    r"\{\{[ \t]*(?P<name>" + NAME_PATTERN.pattern + ")"
    r'(?:[ \t]+"(?P<argument>[^"]*)")?'
    r'[ \t]*\}\}'
)

FunctionTable = Mapping[str, Callable[..., Any]]


@dataclass(frozen=True)
class Placeholder:
    """A well-formed placeholder located in a (stripped) template."""

    name: str
    argument: Optional[str]
    start: int
    end: int
    line: int
    column: int
    text: str


# ── public API ───────────────────────────────────────────────────────


def strip_directives(template: str) -> str:
    """Remove every literal ``daemon off;`` from *template*."""
    return template.replace(STRIPPED_DIRECTIVE, "")


def find_placeholders(template: str) -> List[Placeholder]:
    """Return the placeholders *template* would expand, in document order.

    Directives are stripped first so positions match what
    :func:`render_template` sees.  No function is invoked.
    """
    text = strip_directives(template)
    found: List[Placeholder] = []
    for m in PLACEHOLDER_PATTERN.finditer(text):
        line, column = _line_and_column(text, m.start())
        found.append(
            Placeholder(
                name=m.group("name"),
                argument=m.group("argument"),
                start=m.start(),
                end=m.end(),
                line=line,
                column=column,
                text=m.group(0),
            )
        )
    return found


def render_template(template: str, functions: FunctionTable) -> str:
    """Render *template* against the name → callable table *functions*.

    Parameters
    ----------
    template:
        Raw template text (e.g. the contents of ``nginx.conf.template``).
    functions:
        Mapping of placeholder name → callable.  Placeholders with an
        argument call ``fn(argument)``; bare placeholders call ``fn()``.

    Returns
    -------
    str
        The rendered configuration text.

    Raises
    ------
    UnknownFunctionError
        If a placeholder names a function absent from *functions*.
    Exception
        Whatever an injected function raises, unwrapped.
    """
    text = strip_directives(template)
    parts: List[str] = []
    cursor = 0

    for match in PLACEHOLDER_PATTERN.finditer(text):
        name = match.group("name")
        argument = match.group("argument")

        func = functions.get(name)
        if func is None:
            line, column = _line_and_column(text, match.start())
            raise UnknownFunctionError(name, match.start(), line, column)

        try:
            value = func() if argument is None else func(argument)
        except Exception as exc:
            logger.debug("Template function %r failed (argument=%r)", name, argument)
            exc.add_note(
                f"while rendering placeholder {match.group(0)!r} "
                f"(function={name!r}, argument={argument!r})"
            )
            raise

        logger.debug("Expanded {{%s}} at offset %d", name, match.start())
        parts.append(text[cursor:match.start()])
        parts.append(_to_text(value))
        cursor = match.end()

    parts.append(text[cursor:])
    return "".join(parts)


def render_file(
    template_path: str | Path,
    output_path: str | Path,
    functions: FunctionTable,
) -> Path:
    """Render the template at *template_path* and write *output_path*.

    The output is written only after rendering succeeds, via a sibling
    temp file and :func:`os.replace`, so a failed render never leaves a
    half-written config where nginx will read it.

    Raises
    ------
    FileNotFoundError
        If *template_path* does not exist.
    """
    src = Path(template_path)
    if not src.is_file():
        raise FileNotFoundError(f"Template not found: {template_path}")

    rendered = render_template(src.read_text(encoding="utf-8"), functions)

    dest = Path(output_path)
    dest.parent.mkdir(parents=True, exist_ok=True)
    tmp = dest.with_name(f".{dest.name}.tmp")
    tmp.write_text(rendered, encoding="utf-8")
    os.replace(tmp, dest)

    logger.info("Rendered %s -> %s", src, dest)
    return dest


# ── helpers ──────────────────────────────────────────────────────────


def _to_text(value: Any) -> str:
    """Stringify a function result; bools render lowercase."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _line_and_column(text: str, offset: int) -> tuple[int, int]:
    line = text.count("\n", 0, offset) + 1
    column = offset - (text.rfind("\n", 0, offset) + 1) + 1
    return line, column
