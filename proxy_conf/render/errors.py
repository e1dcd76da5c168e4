"""Errors raised while rendering a proxy config template."""

from __future__ import annotations


class RenderError(Exception):
    """Base class for proxy-conf rendering failures."""


class UnknownFunctionError(RenderError):
    """A placeholder names a function missing from the function table.

    Attributes:
        name: Placeholder name, e.g. ``port``.
        position: Character offset of the ``{{`` in the stripped template.
        line: 1-based line number of the placeholder.
        column: 1-based column of the placeholder.
    """

    def __init__(self, name: str, position: int, line: int, column: int) -> None:
        self.name = name
        self.position = position
        self.line = line
        self.column = column
        super().__init__(
            f"Unknown template function '{name}' at line {line}, column {column}"
        )


class MissingEnvironmentError(RenderError):
    """One or more environment variables required for rendering are unset."""

    def __init__(self, names: list[str]) -> None:
        self.names = list(names)
        super().__init__(
            f"Missing required environment variable(s): {', '.join(self.names)}"
        )
